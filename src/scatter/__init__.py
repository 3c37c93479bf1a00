from .spatial_grid import SpatialGrid
from .poisson import poisson_disk_samples, in_unit_rectangle, in_unit_circle
from .sampling import JitteredGrid, PoissonDisk, jittered_grid_points, grid_region, sample
