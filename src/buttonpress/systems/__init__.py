from buttonpress.systems.base import Algebra, NoSolutionError, ReducedSystem
from buttonpress.systems.gf2 import GF2Algebra
from buttonpress.systems.real import RealAlgebra
