"""Group layered samples into display rows and roll them up per homogeneous area."""
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from app.schemas.observation import ObservationRecord
from app.schemas.sample import AsbestosSampleRecord, SampleLayerRecord
from app.schemas.survey import HomogeneousAreaRecord
from app.services.report.quantity import parse_quantity, parse_quantity_with_unit

HIGH_RISK_LEVELS = ("high", "critical")
HAZARDOUS_RISK_LEVELS = ("medium", "high", "critical")


@dataclass(frozen=True)
class SampleRow:
    sample: AsbestosSampleRecord
    layer_index: int
    layer_count: int
    layer: SampleLayerRecord | None = None

    @property
    def label(self) -> str:
        if self.layer_count > 1:
            return f"{self.sample.sample_number} ({self.layer_index}/{self.layer_count})"
        return self.sample.sample_number

    def _prefer(self, field: str):
        if self.layer is not None:
            value = getattr(self.layer, field)
            if value is not None:
                return value
        return getattr(self.sample, field)

    @property
    def material_type(self) -> str | None:
        return self._prefer("material_type")

    @property
    def asbestos_type(self) -> str | None:
        return self._prefer("asbestos_type")

    @property
    def asbestos_percent(self):
        return self._prefer("asbestos_percent")

    @property
    def notes(self) -> str | None:
        return self._prefer("notes")

    @property
    def description(self) -> str | None:
        if self.layer is not None and self.layer.description is not None:
            return self.layer.description
        return self.sample.sample_description


@dataclass(frozen=True)
class AreaRollup:
    count: int = 0
    total: float = 0.0

    def add(self, quantity: float | None) -> "AreaRollup":
        if quantity is not None and quantity > 0:
            return AreaRollup(self.count + 1, self.total + quantity)
        return AreaRollup(self.count + 1, self.total)


def explode_layers(
    sample: AsbestosSampleRecord, layers: Sequence[SampleLayerRecord] | None
) -> list[SampleRow]:
    """One row per layer in supplied order, or a single row for an unlayered sample."""
    if not layers:
        return [SampleRow(sample=sample, layer_index=0, layer_count=1)]
    count = len(layers)
    return [
        SampleRow(sample=sample, layer_index=index, layer_count=count, layer=layer)
        for index, layer in enumerate(layers, start=1)
    ]


def explode_samples(
    samples: Iterable[AsbestosSampleRecord],
    layers_by_sample: Mapping[str, Sequence[SampleLayerRecord]],
) -> list[SampleRow]:
    rows: list[SampleRow] = []
    for sample in samples:
        rows.extend(explode_layers(sample, layers_by_sample.get(sample.id)))
    return rows


def rollup_homogeneous_areas(
    samples: Iterable[AsbestosSampleRecord],
) -> Mapping[str, AreaRollup]:
    """Sample count and summed positive quantity keyed by homogeneous-area code.

    Samples without a code are left out of both figures.
    """
    rollups: dict[str, AreaRollup] = {}
    for sample in samples:
        code = sample.homogeneous_area
        if not code:
            continue
        current = rollups.get(code, AreaRollup())
        rollups[code] = current.add(parse_quantity(sample.estimated_quantity))
    return MappingProxyType(rollups)


def sort_homogeneous_areas(
    areas: Iterable[HomogeneousAreaRecord],
) -> list[HomogeneousAreaRecord]:
    return sorted(areas, key=lambda area: area.ha_id or "")


def risk_key(obs: ObservationRecord) -> str:
    return (obs.risk_level or "").strip().lower()


def is_high_risk(obs: ObservationRecord) -> bool:
    return risk_key(obs) in HIGH_RISK_LEVELS


def is_hazardous(obs: ObservationRecord) -> bool:
    return risk_key(obs) in HAZARDOUS_RISK_LEVELS


def _add_by_unit(totals: dict[str, float], unit: str, amount: float) -> None:
    totals[unit] = totals.get(unit, 0.0) + amount


@dataclass(frozen=True)
class MaterialQuantities:
    total: Mapping[str, float] = field(default_factory=dict)
    hazardous: Mapping[str, float] = field(default_factory=dict)
    sampled: Mapping[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class QuantitySummary:
    """Observation quantities summed per normalized unit.

    Units are never converted into each other, so "40 LF" and "850 SqFt"
    stay separate entries in every mapping.
    """

    hazardous: Mapping[str, float]
    sampled: Mapping[str, float]
    hazardous_count: int
    by_material: Mapping[str, MaterialQuantities]


def summarize_quantities(observations: Iterable[ObservationRecord]) -> QuantitySummary:
    """Totals for hazardous and sampled observations plus a per-material breakdown.

    Only quantities that parse to a positive number contribute; materials
    without any such quantity are absent from the breakdown.
    """
    hazardous: dict[str, float] = {}
    sampled: dict[str, float] = {}
    by_material: dict[str, dict[str, dict[str, float]]] = {}
    hazardous_count = 0

    for obs in observations:
        if is_hazardous(obs):
            hazardous_count += 1
        parsed = parse_quantity_with_unit(obs.quantity)
        if parsed is None or parsed[0] <= 0:
            continue
        amount, unit = parsed
        material = by_material.setdefault(
            obs.material_type or "", {"total": {}, "hazardous": {}, "sampled": {}}
        )
        _add_by_unit(material["total"], unit, amount)
        if is_hazardous(obs):
            _add_by_unit(hazardous, unit, amount)
            _add_by_unit(material["hazardous"], unit, amount)
        if obs.sample_collected:
            _add_by_unit(sampled, unit, amount)
            _add_by_unit(material["sampled"], unit, amount)

    return QuantitySummary(
        hazardous=MappingProxyType(hazardous),
        sampled=MappingProxyType(sampled),
        hazardous_count=hazardous_count,
        by_material=MappingProxyType({
            code: MaterialQuantities(
                total=MappingProxyType(totals["total"]),
                hazardous=MappingProxyType(totals["hazardous"]),
                sampled=MappingProxyType(totals["sampled"]),
            )
            for code, totals in by_material.items()
        }),
    )
