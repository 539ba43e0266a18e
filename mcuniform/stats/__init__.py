"""Statistical engine: sampler, testers, range distribution and analytic power."""

from . import analytic as analytic
from . import chi_square as chi_square
from . import distributions as distributions
from . import range_distribution as range_distribution
from . import range_test as range_test
from . import sampler as sampler
