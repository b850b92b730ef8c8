"""Curated medium → recommended velocity reference data."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class VelocityEntry:
    """Design velocity range (m/s) for one medium."""

    min_velocity: float
    max_velocity: float
    category: str
    recommendation: str

    def __post_init__(self) -> None:
        if self.min_velocity <= 0 or self.max_velocity <= 0:
            raise ValueError("Velocities must be positive.")
        if self.min_velocity > self.max_velocity:
            raise ValueError(
                f"min_velocity {self.min_velocity} exceeds max_velocity {self.max_velocity}"
            )

    @property
    def midpoint(self) -> float:
        return (self.min_velocity + self.max_velocity) / 2


# Grouped by category; declaration order is also the fuzzy-match priority.
VELOCITY_DATA: Tuple[Tuple[str, float, float, str, str], ...] = (
    # 水及水溶液
    ("自来水", 1.0, 1.5, "水及水溶液", "防噪音要求≤1.2m/s"),
    ("循环冷却水", 2.0, 2.5, "水及水溶液", "防腐蚀需≤2.2m/s"),
    ("盐水", 1.2, 1.8, "水及水溶液", "制冷系统/化工流程，需考虑沸点升高效应"),
    # 蒸汽系统
    ("饱和蒸汽", 20.0, 30.0, "蒸汽系统", "避免冷凝水携带（≤25m/s）"),
    ("过热蒸汽", 35.0, 50.0, "蒸汽系统", "管道振动控制"),
    ("冷凝水回水", 0.5, 1.2, "蒸汽系统", "防气蚀设计"),
    # 气体介质
    ("压缩空气", 10.0, 15.0, "气体介质", "气动工具管网，需设油水分离器"),
    ("天然气", 8.0, 12.0, "气体介质", "城市输配管网，含硫气体需降速20%"),
    ("氧气", 5.0, 8.0, "气体介质", "钢铁冶炼供气，禁油设计+流速下限控制"),
    # 特殊流体
    ("液氨", 0.8, 1.5, "特殊流体", "保冷管道+防震支架"),
    ("硫酸", 0.6, 1.2, "特殊流体", "衬塑管道+低流速防结晶"),
    ("泥浆", 1.5, 2.0, "特殊流体", "流速需＞沉降临界值"),
    # 暖通专用
    ("乙二醇溶液", 1.0, 2.5, "暖通专用", "ASHRAE标准"),
    ("热水", 0.3, 0.5, "暖通专用", "防气阻设计"),
    ("高温烟气", 8.0, 12.0, "暖通专用", "耐火材料内衬"),
)


class ReferenceTable(Mapping):
    """Read-only mapping of canonical medium name to :class:`VelocityEntry`.

    Iteration follows declaration order, which the medium resolver relies on
    to break ties between several fuzzy candidates.
    """

    def __init__(self, entries: Iterable[Tuple[str, VelocityEntry]]):
        data: Dict[str, VelocityEntry] = {}
        for name, entry in entries:
            if name in data:
                raise ValueError(f"Duplicate medium name: {name}")
            data[name] = entry
        self._entries = MappingProxyType(data)

    def __getitem__(self, name: str) -> VelocityEntry:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, name: str) -> Optional[VelocityEntry]:
        """Exact-key lookup; returns ``None`` for unknown names."""
        return self._entries.get(name)

    def names(self) -> List[str]:
        return list(self._entries)

    def categories(self) -> List[str]:
        """Distinct categories in declaration order."""
        seen: Dict[str, None] = {}
        for entry in self._entries.values():
            seen.setdefault(entry.category, None)
        return list(seen)

    @classmethod
    def from_rows(
        cls, rows: Iterable[Tuple[str, float, float, str, str]]
    ) -> "ReferenceTable":
        return cls(
            (name, VelocityEntry(low, high, category, recommendation))
            for name, low, high, category, recommendation in rows
        )


@lru_cache(maxsize=1)
def default_reference_table() -> ReferenceTable:
    """Build the built-in table once per process."""
    return ReferenceTable.from_rows(VELOCITY_DATA)
