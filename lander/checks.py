"""Runtime type checking configuration.

All public classes and functions are checked with beartype under the
implicit numeric tower of PEP 484, so an ``int`` is accepted wherever a
``float`` is hinted (``sim.tick(2)``, ``pid.update(3, 0.1)``).

Example:
    >>> from beartype import beartype
    >>> from lander.checks import NUMERIC_TOWER
    >>>
    >>> @beartype(conf=NUMERIC_TOWER)
    ... def scale(x: float) -> float:
    ...     return 2 * x
    >>> scale(3)
    6
"""

from beartype import BeartypeConf

NUMERIC_TOWER = BeartypeConf(is_pep484_tower=True)
