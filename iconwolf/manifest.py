"""Typed model of an Icon Composer ``icon.json`` manifest.

The on-disk fill is an object with optional, mutually exclusive keys. It is
parsed once into ``SolidFill``, ``GradientFill`` or ``NoFill`` so the renderer
never probes for keys itself.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from .errors import FormatError


@dataclass(frozen=True)
class UnitPoint:
    x: float
    y: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UnitPoint':
        try:
            return cls(float(data['x']), float(data['y']))
        except (KeyError, TypeError, ValueError):
            raise FormatError(f'Invalid gradient point: {data!r}') from None

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y}


@dataclass(frozen=True)
class SolidFill:
    color: str

    def to_dict(self) -> Dict[str, Any]:
        return {'solid': self.color}


@dataclass(frozen=True)
class GradientFill:
    stops: Tuple[str, ...]
    start: UnitPoint
    stop: UnitPoint

    def to_dict(self) -> Dict[str, Any]:
        return {
            'linear-gradient': list(self.stops),
            'orientation': {'start': self.start.to_dict(), 'stop': self.stop.to_dict()},
        }


@dataclass(frozen=True)
class NoFill:
    def to_dict(self) -> Dict[str, Any]:
        return {}


Fill = Union[SolidFill, GradientFill, NoFill]


def parse_fill(data: Optional[Dict[str, Any]]) -> Fill:
    if not isinstance(data, dict):
        return NoFill()
    stops = data.get('linear-gradient')
    orientation = data.get('orientation')
    if stops and orientation:
        if not isinstance(stops, list) or not isinstance(orientation, dict):
            raise FormatError(f'Invalid gradient fill: {data!r}')
        return GradientFill(
            tuple(stops),
            UnitPoint.from_dict(orientation.get('start') or {}),
            UnitPoint.from_dict(orientation.get('stop') or {}),
        )
    # 'color' is the key older Icon Composer builds wrote for solids.
    color = data.get('solid') or data.get('color')
    if color:
        return SolidFill(color)
    return NoFill()


@dataclass(frozen=True)
class FillSpecialization:
    value: Fill
    appearance: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FillSpecialization':
        if not isinstance(data, dict):
            raise FormatError(f'Invalid fill specialization: {data!r}')
        return cls(parse_fill(data.get('value')), data.get('appearance'))

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.appearance:
            out['appearance'] = self.appearance
        out['value'] = self.value.to_dict()
        return out


@dataclass(frozen=True)
class Layer:
    image_name: str
    name: str
    scale: float = 1.0
    translation: Tuple[float, float] = (0, 0)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Layer':
        if not isinstance(data, dict) or not data.get('image-name'):
            raise FormatError(f'Layer is missing an image-name: {data!r}')
        position = data.get('position') or {}
        try:
            scale = float(position.get('scale', 1.0))
            dx, dy = position.get('translation-in-points', (0, 0))
            translation = (float(dx), float(dy))
        except (TypeError, ValueError):
            raise FormatError(f'Invalid position for layer {data["image-name"]}: {position!r}') from None
        return cls(data['image-name'], data.get('name', ''), scale, translation)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'image-name': self.image_name,
            'name': self.name,
            'position': {
                'scale': self.scale,
                'translation-in-points': list(self.translation),
            },
        }


@dataclass(frozen=True)
class Group:
    layers: Tuple[Layer, ...]
    # Carried through for round trips; rendering ignores both.
    shadow: Optional[Dict[str, Any]] = None
    translucency: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Group':
        if not isinstance(data, dict) or not isinstance(data.get('layers', []), list):
            raise FormatError(f'Invalid group: {data!r}')
        layers = tuple(Layer.from_dict(layer) for layer in data.get('layers', []))
        return cls(layers, data.get('shadow'), data.get('translucency'))

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {'layers': [layer.to_dict() for layer in self.layers]}
        if self.shadow is not None:
            out['shadow'] = self.shadow
        if self.translucency is not None:
            out['translucency'] = self.translucency
        return out


@dataclass(frozen=True)
class Manifest:
    fill: Optional[Fill] = None
    fill_specializations: Tuple[FillSpecialization, ...] = ()
    groups: Tuple[Group, ...] = ()
    supported_platforms: Any = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Manifest':
        if not isinstance(data, dict):
            raise FormatError('icon.json must contain a JSON object')
        specializations = data.get('fill-specializations') or []
        groups = data.get('groups') or []
        if not isinstance(specializations, list) or not isinstance(groups, list):
            raise FormatError('icon.json fill-specializations and groups must be lists')
        return cls(
            fill=parse_fill(data['fill']) if data.get('fill') is not None else None,
            fill_specializations=tuple(FillSpecialization.from_dict(s) for s in specializations),
            groups=tuple(Group.from_dict(g) for g in groups),
            supported_platforms=data.get('supported-platforms'),
        )

    def resolve_fill(self) -> Fill:
        """Top-level fill, else the light (untagged) specialization, else the first one."""
        if self.fill is not None:
            return self.fill
        for specialization in self.fill_specializations:
            if not specialization.appearance:
                return specialization.value
        if self.fill_specializations:
            return self.fill_specializations[0].value
        return NoFill()

    def layers(self) -> List[Layer]:
        return [layer for group in self.groups for layer in group.layers]

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.fill_specializations:
            out['fill-specializations'] = [s.to_dict() for s in self.fill_specializations]
        elif self.fill is not None:
            out['fill'] = self.fill.to_dict()
        out['groups'] = [group.to_dict() for group in self.groups]
        if self.supported_platforms is not None:
            out['supported-platforms'] = self.supported_platforms
        return out
