# hplbench

A Linpack-style benchmark. It reads its run parameters from an `HPL.dat` input
file or from the command line, then generates random dense linear systems. Each
system is solved with numpy's LU-based solver. Every solve is timed and reported
with its Gflops rate, and the scaled residual

    ||Ax-b||_oo / ( eps * ( ||x||_oo * ||A||_oo + ||b||_oo ) * N )

is checked against a threshold.

## Installation

    pip install .

## Running

    hplbench -N 2000 -NB 128

The command accepts these options:

| Option | Meaning | Default |
| --- | --- | --- |
| `-P`, `--ranksP` | rows in the process grid | 1 |
| `-Q`, `--ranksQ` | columns in the process grid | 1 |
| `-p`, `-q` | node-local grid shape | derived |
| `-N`, `--sizeN` | matrix order | 45312 |
| `-NB`, `--sizeNB` | panel size | 384 |
| `-f`, `--frac` | trailing update split fraction | 0.6 |
| `-i`, `--input` | read the run parameters from this input file | `HPL.dat` |
| `-h`, `--help` | print the help message | |
| `--version` | print the version line | |

If any of `-P`, `-Q`, `-p`, `-q`, `-N` or `-NB` is given and `-i` is not, the run
uses a single test built from those values and writes its results to `HPL.out`.
In every other case, including a command line with no options, the parameters
are read from the input file (`HPL.dat` unless `-i` names another). The value of
`-f` is applied in both cases.

Illegal values are reported on standard error as an `HPL ERROR` block, and the
command exits with status 1. `--help` and `--version` exit with status 0.

The output begins with a banner and a list of the parameters in use. It then has
one results line per test. A line carries the encoded variant (`T/V`), N, NB, P,
Q, the wall time and the Gflops rate, followed by the solve's start and end times.
When the threshold is positive, each result is followed by its scaled residual,
marked `PASSED` or `FAILED`. A failure also lists the norms. The report ends with
counts of tests passed, failed and skipped.

## Input file layout

    HPLinpack benchmark input file
    Your message here
    HPL.out      output file name (if any)
    6            device out (6=stdout,7=stderr,file)
    1            # of problems sizes (N)
    1000         Ns
    1            # of NBs
    128          NBs
    0            PMAP process mapping (0=Row-,1=Column-major)
    1            # of process grids (P x Q)
    1            Ps
    1            Qs
    16.0         threshold
    1            # of panel fact
    2            PFACTs (0=left, 1=Crout, 2=Right)
    1            # of recursive stopping criterium
    16           NBMINs (>= 1)
    1            # of panels in recursion
    2            NDIVs
    1            # of recursive panel fact.
    2            RFACTs (0=left, 1=Crout, 2=Right)
    1            # of broadcast
    0            BCASTs (0=1rg,1=1rM,2=2rg,3=2rM,4=Lng,5=LnM)
    1            # of lookahead depth
    1            DEPTHs (must be 1)
    1            SWAP (must be 1)
    64           swapping threshold
    0            L1 in (0=transposed,1=no-transposed) form
    0            U  in (must be 0, transposed) form
    0            Equilibration (must be 0)
    8            memory alignment in double (> 0)

Only the first word of each line is read, except on the lines that list values.
Each list holds between 1 and 20 values. The output unit 6 sends results to
standard output and 7 sends them to standard error. Any other unit writes them to
the named file. A threshold of zero or less switches the residual check off.
Every combination of sizes, block sizes and algorithm variants is run as its own
test.

## What it does not do

Everything runs in one process on the CPU. There is no distributed execution and
no accelerator is used. As a result, every process grid must be 1 x 1, and larger
`P`/`Q` values are rejected with "Need at least ... processes". Results always
report P and Q as 1. The algorithm parameters (factorization variants,
broadcast topology, NBMIN, NDIV) are recorded and printed in the variant code,
but they do not change how the system is solved. `hplbench.device.select_device`
only computes which device a process at a given node-local grid position would
use. It does not open a device.

## Library use

```python
from hplbench.runner import generate_system, check_solution
from hplbench.machine import lamch, MachineParam
import numpy as np

a, b = generate_system(100, seed=100)
x = np.linalg.solve(a, b)
check = check_solution(a, x, b, lamch(MachineParam.EPS))
print(check.resid1)
```

Other modules:

- `hplbench.dense`: `lacpy`, `latcpy`, `lange` with the `Norm` options `A`, `ONE` and `INF`, and `laprnt`.
- `hplbench.machine`: `machine_constants()` and `lamch()`, floating-point constants found by probing the arithmetic.
- `hplbench.datfile`: `read_input_file` and `parse_input_lines`, both returning a `RunConfig`.
- `hplbench.settings`: `RunConfig`, the parameter enums, `default_config` and `resolve_local_grid`.
- `hplbench.runner`: `run_test`, which runs and reports one test.
- `hplbench.driver`: `load_config`, `enumerate_algorithms`, `format_summary` and `main`.