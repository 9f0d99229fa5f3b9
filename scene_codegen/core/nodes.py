"""
Scene input model and canonical node tree.

The scene is what the editor hands us: nested dictionaries, possibly
grouped in layers. :func:`parse_scene` turns it into typed
:class:`SceneNode` objects, rejecting anything that is not traversable.
The normalizer then produces :class:`CanonicalNode` trees, which are
built fresh for every export call and never shared.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from ..logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_SCENE_WIDTH = 800
DEFAULT_SCENE_HEIGHT = 600

_TYPE_KEYS = ("type", "uiComponentType", "componentType")
_TARGET_KEYS = ("targetType", "avaloniaType", "avaloniaControl")
_PROPERTY_KEYS = ("properties", "uiProperties", "props")
_CHILD_KEYS = ("children", "objects", "components", "nodes")


class SceneError(Exception):
    """Raised when a scene cannot be traversed."""

    pass


@dataclass
class SceneNode:
    """One node of the external scene tree (read-only input)."""

    type: str
    target_type: Optional[str] = None
    name: Optional[str] = None
    properties: Dict[str, Any] = field(default_factory=dict)
    x: float = 0
    y: float = 0
    content: Optional[Any] = None
    children: List["SceneNode"] = field(default_factory=list)
    path: str = ""

    def walk(self) -> Iterator["SceneNode"]:
        """Depth-first iteration over this node and its descendants."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass
class Scene:
    """Parsed scene: flattened top-level nodes plus document metadata."""

    nodes: List[SceneNode] = field(default_factory=list)
    title: Optional[str] = None
    width: float = DEFAULT_SCENE_WIDTH
    height: float = DEFAULT_SCENE_HEIGHT
    resources: Dict[str, Any] = field(default_factory=dict)
    palette: Dict[str, str] = field(default_factory=dict)
    fonts: Dict[str, str] = field(default_factory=dict)

    def walk(self) -> Iterator[SceneNode]:
        for node in self.nodes:
            yield from node.walk()


@dataclass(frozen=True)
class MarkupFragment:
    """Nested-element value produced by a converter (e.g. a gradient brush)."""

    element: str
    attributes: Tuple[Tuple[str, str], ...] = ()
    children: Tuple["MarkupFragment", ...] = ()

    @classmethod
    def create(
        cls,
        element: str,
        attributes: Optional[Mapping[str, Any]] = None,
        children: Optional[List["MarkupFragment"]] = None,
    ) -> "MarkupFragment":
        """Build a fragment from an ordered mapping of attributes."""
        attrs = tuple((key, str(value)) for key, value in (attributes or {}).items())
        return cls(element, attrs, tuple(children or ()))

    def get(self, name: str) -> Optional[str]:
        for key, value in self.attributes:
            if key == name:
                return value
        return None


@dataclass(frozen=True)
class EventBinding:
    """Event wired in markup that needs a companion handler stub."""

    event: str
    handler: str
    args_type: str
    component: str


@dataclass
class CanonicalNode:
    """Mapping-resolved node ready for emission."""

    target_type: str
    source_type: str
    name: Optional[str] = None
    attributes: Dict[str, str] = field(default_factory=dict)
    nested_properties: Dict[str, MarkupFragment] = field(default_factory=dict)
    attached_properties: Dict[str, str] = field(default_factory=dict)
    children: List["CanonicalNode"] = field(default_factory=list)
    text_content: Optional[str] = None
    content_property: Optional[str] = None
    namespace: Optional[str] = None
    supported: bool = True
    events: List[EventBinding] = field(default_factory=list)
    path: str = ""

    @property
    def has_body(self) -> bool:
        return bool(self.children or self.nested_properties or self.text_content is not None)

    def walk(self) -> Iterator["CanonicalNode"]:
        """Depth-first iteration over this node and its descendants."""
        yield self
        for child in self.children:
            yield from child.walk()


def _first(data: Mapping[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _number(value: Any, default: float = 0) -> float:
    if isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def parse_node(data: Any, path: str, depth: int = 0, max_depth: int = 64) -> SceneNode:
    """
    Parse one raw node dictionary.

    Args:
        data: Raw node
        path: Location used in diagnostics (e.g. ``0/children/2``)
        depth: Current nesting depth
        max_depth: Maximum allowed nesting depth

    Returns:
        Parsed scene node

    Raises:
        SceneError: If the node is malformed or nested too deeply
    """
    if depth >= max_depth:
        raise SceneError(f"Scene nesting exceeds maximum depth of {max_depth} at {path}")

    if not isinstance(data, Mapping):
        raise SceneError(f"Scene node at {path} must be an object, got {type(data).__name__}")

    node_type = _first(data, _TYPE_KEYS)
    target_type = _first(data, _TARGET_KEYS)
    if node_type is None and target_type is None:
        node_type = "unknown"

    properties: Dict[str, Any] = {}
    for key in _PROPERTY_KEYS:
        bag = data.get(key)
        if bag is None:
            continue
        if not isinstance(bag, Mapping):
            raise SceneError(f"Property bag '{key}' at {path} must be an object")
        properties.update(bag)

    raw_children = _first(data, _CHILD_KEYS) or []
    if not isinstance(raw_children, (list, tuple)):
        raise SceneError(f"Children of node at {path} must be a list")

    content = data.get("content")
    if content is None:
        content = data.get("text")

    children = [
        parse_node(child, f"{path}/children/{index}", depth + 1, max_depth)
        for index, child in enumerate(raw_children)
    ]

    return SceneNode(
        type=str(node_type if node_type is not None else target_type),
        target_type=str(target_type) if target_type is not None else None,
        name=str(data["name"]) if data.get("name") else None,
        properties=properties,
        x=_number(data.get("x")),
        y=_number(data.get("y")),
        content=content,
        children=children,
        path=path,
    )


def _flatten_layers(layers: Any) -> List[Any]:
    if not isinstance(layers, (list, tuple)):
        raise SceneError("Scene 'layers' must be a list")

    flattened = []
    for index, layer in enumerate(layers):
        if not isinstance(layer, Mapping):
            raise SceneError(f"Layer {index} must be an object")
        if layer.get("visible") is False:
            logger.debug(f"Skipping hidden layer {layer.get('name', index)}")
            continue
        objects = _first(layer, _CHILD_KEYS) or []
        if not isinstance(objects, (list, tuple)):
            raise SceneError(f"Objects of layer {index} must be a list")
        flattened.extend(objects)
    return flattened


def parse_scene(data: Any, max_depth: int = 64) -> Scene:
    """
    Parse a raw scene into a :class:`Scene`.

    Accepts a list of nodes, a dict with ``layers`` (hidden layers are
    skipped, order preserved) or a dict with ``objects``/``components``/
    ``children``.

    Args:
        data: Raw scene
        max_depth: Maximum nesting depth before failing

    Returns:
        Parsed scene

    Raises:
        SceneError: If the scene is not traversable
    """
    if isinstance(data, Scene):
        return data

    if isinstance(data, (list, tuple)):
        raw_nodes = list(data)
        meta: Mapping[str, Any] = {}
    elif isinstance(data, Mapping):
        meta = data
        if data.get("layers") is not None:
            raw_nodes = _flatten_layers(data["layers"])
        else:
            raw_nodes = _first(data, _CHILD_KEYS) or []
            if not isinstance(raw_nodes, (list, tuple)):
                raise SceneError("Scene nodes must be a list")
    else:
        raise SceneError(
            f"Scene must be an object or a list of nodes, got {type(data).__name__}"
        )

    nodes = [parse_node(raw, str(index), 0, max_depth) for index, raw in enumerate(raw_nodes)]

    canvas = meta.get("canvas") if isinstance(meta.get("canvas"), Mapping) else {}
    width = _number(meta.get("width") or canvas.get("width"), DEFAULT_SCENE_WIDTH)
    height = _number(meta.get("height") or canvas.get("height"), DEFAULT_SCENE_HEIGHT)

    for key in ("resources", "palette", "fonts"):
        if meta.get(key) is not None and not isinstance(meta.get(key), Mapping):
            raise SceneError(f"Scene '{key}' must be an object")

    return Scene(
        nodes=nodes,
        title=str(meta["title"]) if meta.get("title") else None,
        width=width,
        height=height,
        resources=dict(meta.get("resources") or {}),
        palette=dict(meta.get("palette") or {}),
        fonts=dict(meta.get("fonts") or {}),
    )
