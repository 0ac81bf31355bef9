"""Mapping of node-local processes onto accelerator devices."""

from __future__ import annotations

from dataclasses import dataclass


class NoDeviceError(RuntimeError):
    """Raised when a node reports no usable devices."""

    def __init__(self, host_name: str) -> None:
        super().__init__(
            f"Node {host_name} found no GPUs. Is the ROCm kernel module loaded?"
        )
        self.host_name = host_name


@dataclass(frozen=True)
class DeviceBinding:
    """The device chosen for one process in the node-local grid."""

    local_rank: int
    local_size: int
    device: int


def select_device(
    local_row: int,
    local_col: int,
    local_npcol: int,
    local_nprow: int,
    device_count: int,
    host_name: str,
) -> DeviceBinding:
    """Pick a device for the process at (``local_row``, ``local_col``).

    Processes are numbered row by row within the node-local grid and dealt
    out over the devices round-robin.
    """
    if device_count < 1:
        raise NoDeviceError(host_name)
    local_rank = local_col + local_row * local_npcol
    local_size = local_npcol * local_nprow
    return DeviceBinding(
        local_rank=local_rank,
        local_size=local_size,
        device=local_rank % device_count,
    )