"""Fixed domain tables consumed by the scene renderers.

Renderers take these as parameters (with the shipped tables as defaults) so the
draw code itself carries no domain data.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from climate_canvas.errors import SceneDataError


@dataclass(frozen=True)
class Dataset:
    key: str
    labels: tuple[str, ...]
    values: tuple[float, ...]
    unit: str

    def __post_init__(self) -> None:
        if len(self.values) < 2:
            raise SceneDataError(f"dataset `{self.key}` needs at least two samples")
        if len(self.labels) != len(self.values):
            raise SceneDataError(
                f"dataset `{self.key}` label/value length mismatch: {len(self.labels)} != {len(self.values)}"
            )

    def __len__(self) -> int:
        return len(self.values)

    @property
    def first(self) -> float:
        return self.values[0]

    @property
    def last(self) -> float:
        return self.values[-1]


@dataclass(frozen=True)
class Scenario:
    id: int
    name: str
    temp: float
    description: str


@dataclass(frozen=True)
class Region:
    name: str
    x: float
    y: float
    w: float
    h: float
    multiplier: float


@dataclass(frozen=True)
class Building:
    x: float
    w: float
    h: float


@dataclass(frozen=True)
class SeaLevelTier:
    """Impact wording used while ``temp < upper_bound`` (``None`` = no bound)."""

    upper_bound: float | None
    impacts: tuple[str, str, str]


@dataclass(frozen=True)
class ZoneImpact:
    """Regional wording: ``above`` when ``temp > threshold``, else ``below``."""

    element_id: str
    multiplier: float
    threshold: float
    above: str
    below: str


YEAR_LABELS = ("Pre-1800", "1850", "1900", "1950", "1970", "1980", "1990", "2000", "2010", "2020", "2023")

DATASETS: Mapping[str, Dataset] = MappingProxyType(
    {
        "co2": Dataset(
            key="co2",
            labels=YEAR_LABELS,
            values=(280, 290, 300, 310, 320, 330, 340, 360, 380, 400, 415),
            unit="ppm",
        ),
        "temp": Dataset(
            key="temp",
            labels=YEAR_LABELS,
            values=(0.0, 0.1, 0.2, 0.3, 0.35, 0.45, 0.6, 0.75, 0.9, 1.02, 1.2),
            unit="°C",
        ),
    }
)

SCENARIOS: Mapping[int, Scenario] = MappingProxyType(
    {
        1: Scenario(
            id=1,
            name="Paris Agreement",
            temp=1.8,
            description=(
                "Achieving all Paris Agreement commitments limits warming to 1.8°C, "
                "reducing but not eliminating severe climate impacts."
            ),
        ),
        2: Scenario(
            id=2,
            name="Current Policies",
            temp=2.7,
            description=(
                "Following current climate policies leads to approximately 2.7°C warming by 2100, "
                "causing severe impacts on ecosystems and human societies."
            ),
        ),
        3: Scenario(
            id=3,
            name="No Action",
            temp=3.5,
            description=(
                "Without climate action, warming could reach 3.5°C, "
                "triggering catastrophic tipping points and irreversible damage."
            ),
        ),
        4: Scenario(
            id=4,
            name="Worst Case",
            temp=4.4,
            description=(
                "In a worst-case scenario with continued high emissions, warming exceeds 4°C, "
                "making large parts of Earth uninhabitable."
            ),
        ),
    }
)

REGIONS: tuple[Region, ...] = (
    Region(name="Arctic", x=50, y=40, w=80, h=60, multiplier=1.8),
    Region(name="N.America", x=150, y=60, w=120, h=50, multiplier=1.1),
    Region(name="Europe", x=280, y=70, w=100, h=50, multiplier=1.0),
    Region(name="S.America", x=50, y=120, w=100, h=60, multiplier=0.9),
    Region(name="Africa", x=200, y=140, w=120, h=70, multiplier=1.2),
    Region(name="Asia", x=320, y=120, w=80, h=80, multiplier=1.1),
)

BUILDINGS: tuple[Building, ...] = (
    Building(x=50, w=40, h=120),
    Building(x=100, w=50, h=180),
    Building(x=160, w=35, h=100),
    Building(x=205, w=45, h=160),
    Building(x=260, w=40, h=140),
    Building(x=310, w=50, h=200),
)

SEA_LEVEL_TIERS: tuple[SeaLevelTier, ...] = (
    SeaLevelTier(
        upper_bound=2.0,
        impacts=(
            "100+ coastal cities at risk",
            "50-100 million people displaced",
            "Small island nations threatened",
        ),
    ),
    SeaLevelTier(
        upper_bound=3.0,
        impacts=(
            "200+ major cities severely flooded",
            "200-300 million people displaced",
            "Multiple island nations submerged",
        ),
    ),
    SeaLevelTier(
        upper_bound=None,
        impacts=(
            "400+ cities catastrophically flooded",
            "500+ million people displaced",
            "Entire island nations lost",
        ),
    ),
)

ZONE_IMPACTS: tuple[ZoneImpact, ...] = (
    ZoneImpact(element_id="arcticImpact", multiplier=1.8, threshold=3.0, above="Ice-free summers", below="Rapid ice loss"),
    ZoneImpact(element_id="tropicsImpact", multiplier=0.9, threshold=2.5, above="Coral extinction", below="Coral bleaching"),
    ZoneImpact(element_id="midLatImpact", multiplier=1.0, threshold=3.0, above="Severe droughts", below="Extreme weather"),
)


def get_dataset(key: str, datasets: Mapping[str, Dataset] = DATASETS) -> Dataset:
    try:
        return datasets[key]
    except KeyError:
        raise SceneDataError(f"unknown dataset: {key!r}") from None


def get_scenario(scenario_id: int | str | None, scenarios: Mapping[int, Scenario] = SCENARIOS) -> Scenario:
    try:
        return scenarios[int(scenario_id)]  # type: ignore[arg-type]
    except (KeyError, TypeError, ValueError):
        raise SceneDataError(f"unknown scenario: {scenario_id!r}") from None


def sea_level_tier(temp: float, tiers: tuple[SeaLevelTier, ...] = SEA_LEVEL_TIERS) -> SeaLevelTier:
    for tier in tiers:
        if tier.upper_bound is None or temp < tier.upper_bound:
            return tier
    raise SceneDataError("sea-level tiers must end with an unbounded tier")
