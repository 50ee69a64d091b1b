"""Library settings and random number generation.

:class:`Settings` holds the tunables shared across pgmflow and doubles as a
context manager, so a block of code can run with different settings:

>>> with Settings(seed=42, cpd_tolerance=1e-2):
...     engine = ImportanceSamplingEngine(model, evidence, samples=2000)

Outside of any ``with`` block the process-wide defaults apply.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Union

import numpy as np


@dataclass
class Settings:
    """Tunable library settings.

    Parameters
    ----------
    cpd_tolerance : float
        Absolute tolerance used when checking that each conditional slice of
        a CPD sums to 1.
    seed : int, optional
        Seed for the shared generator handed out by :func:`make_rng` when the
        caller supplies none.  ``None`` draws fresh entropy.
    """

    cpd_tolerance: float = 1e-3
    seed: Optional[int] = None
    _parent: Optional["Settings"] = field(
        default=None, init=False, repr=False, compare=False
    )
    _rng: Optional[np.random.Generator] = field(
        default=None, init=False, repr=False, compare=False
    )

    _active: ClassVar[Optional["Settings"]] = None

    def __post_init__(self) -> None:
        if self.cpd_tolerance <= 0:
            raise ValueError(
                f"cpd_tolerance must be positive, got {self.cpd_tolerance}"
            )

    def generator(self) -> np.random.Generator:
        """The generator seeded from :attr:`seed`, created on first use."""
        if self._rng is None:
            self._rng = np.random.default_rng(self.seed)
        return self._rng

    def __enter__(self) -> "Settings":
        self._parent = Settings._active
        Settings._active = self
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        Settings._active = self._parent
        self._parent = None
        return False


_DEFAULT_SETTINGS = Settings()


def get_settings() -> Settings:
    """Return the active settings, or the process defaults."""
    active = Settings._active
    return active if active is not None else _DEFAULT_SETTINGS


def make_rng(
    rng: Union[None, int, np.random.Generator] = None,
) -> np.random.Generator:
    """Coerce *rng* into a :class:`numpy.random.Generator`.

    ``None`` returns the shared generator of the active settings, so
    successive calls continue one stream; an ``int`` seeds a new generator;
    a generator is returned unchanged.
    """
    if isinstance(rng, np.random.Generator):
        return rng
    if rng is None:
        return get_settings().generator()
    return np.random.default_rng(rng)
