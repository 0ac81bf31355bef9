import pytest

from hplbench.device import DeviceBinding, NoDeviceError, select_device


def _grid(nprow, npcol, count):
    return [
        select_device(r, c, npcol, nprow, count, "node")
        for r in range(nprow)
        for c in range(npcol)
    ]


@pytest.mark.parametrize("count", [0, -1])
def test_no_devices_raises(count):
    with pytest.raises(NoDeviceError) as info:
        select_device(0, 0, 2, 2, count, "compute-node")
    assert info.value.host_name == "compute-node"
    assert "compute-node" in str(info.value)


@pytest.mark.parametrize("nprow,npcol", [(1, 4), (2, 2), (2, 3)])
def test_local_ranks_cover_grid(nprow, npcol):
    bindings = _grid(nprow, npcol, 8)
    assert sorted(b.local_rank for b in bindings) == list(range(nprow * npcol))
    assert all(b.local_size == nprow * npcol for b in bindings)


def test_ranks_advance_along_columns():
    first = select_device(1, 0, 3, 2, 8, "node")
    second = select_device(1, 1, 3, 2, 8, "node")
    assert second.local_rank == first.local_rank + 1


@pytest.mark.parametrize("count", [1, 2, 3, 5])
def test_devices_in_range(count):
    for binding in _grid(2, 3, count):
        assert 0 <= binding.device < count


def test_distinct_devices_when_enough():
    bindings = _grid(2, 2, 4)
    assert len({b.device for b in bindings}) == 4


def test_single_device_shared():
    assert {b.device for b in _grid(2, 3, 1)} == {0}


def test_round_robin_wraps():
    bindings = _grid(1, 6, 3)
    devices = [b.device for b in bindings]
    assert devices[:3] == devices[3:]


def test_binding_is_frozen():
    binding = select_device(0, 0, 1, 1, 1, "node")
    assert binding == DeviceBinding(local_rank=0, local_size=1, device=0)
    with pytest.raises(AttributeError):
        binding.device = 2