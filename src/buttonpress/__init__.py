from buttonpress.aggregate import solve_all, total_cost
from buttonpress.config import SolverConfig, load_config
from buttonpress.machine import Machine
from buttonpress.parsing import parse_line, parse_machines
from buttonpress.solve import (
    get_algebra,
    min_sum_integer_presses,
    min_weight_gf2,
    solve,
    solve_presses,
)
from buttonpress.systems import (
    GF2Algebra,
    NoSolutionError,
    RealAlgebra,
    ReducedSystem,
)
