"""
Avalonia markup emission.

Serializes canonical node trees into ``.axaml`` text. Layout decisions
(inline vs. multi-line elements, nested property elements, the implicit
positioning canvas) are made here; all whitespace goes through
:class:`LineBuilder`.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ...core.builder import LineBuilder
from ...core.config import ExportOptions, RootKind
from ...core.nodes import CanonicalNode, MarkupFragment, Scene
from ...logging_config import get_logger
from .converters import is_markup_extension
from .fragments import format_number
from .mappings import DEFAULT_NAMESPACE

logger = get_logger(__name__)

XML_PREAMBLE = '<?xml version="1.0" encoding="utf-8"?>'

XAML_NAMESPACES = {
    "default": "https://github.com/avaloniaui",
    "x": "http://schemas.microsoft.com/winfx/2006/xaml",
    "d": "http://schemas.microsoft.com/expression/blend/2008",
    "mc": "http://schemas.openxmlformats.org/markup-compatibility/2006",
}

NAMESPACE_ALIASES = {
    "Avalonia.Controls.Primitives": "primitives",
    "Avalonia.Controls.Shapes": "shapes",
    "Avalonia.Media": "media",
    "Avalonia.Layout": "layout",
    "Avalonia.Data": "data",
    "Avalonia.Interactivity": "interactivity",
}

POSITIONING_ATTRIBUTES = ("Canvas.Left", "Canvas.Top")

_XML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


def escape_xml(text: Any, attribute: bool = True) -> str:
    """Escape markup special characters.

    Attribute values that are a recognized markup extension (bindings,
    resource references, ``{x:Null}``) pass through. Any other attribute
    text starting with ``{`` gets the ``{}`` escape sequence so the parser
    reads it as a literal string.
    """
    text = str(text)
    if attribute and is_markup_extension(text):
        return text
    for char, entity in _XML_ESCAPES:
        text = text.replace(char, entity)
    if attribute and text.startswith("{"):
        text = "{}" + text
    return text


def namespace_alias(clr_namespace: str) -> str:
    """XML prefix for a CLR namespace other than the default controls one."""
    return NAMESPACE_ALIASES.get(clr_namespace) or clr_namespace.rsplit(".", 1)[-1].lower()


@dataclass
class DocumentInfo:
    """Scene-level metadata written on the root element."""

    title: Optional[str] = None
    width: float = 800
    height: float = 600
    resources: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_scene(cls, scene: Scene) -> "DocumentInfo":
        return cls(
            title=scene.title,
            width=scene.width,
            height=scene.height,
            resources=dict(scene.resources),
        )


class MarkupGenerator:
    """Generates Avalonia markup documents from canonical nodes."""

    def __init__(self, options: Optional[ExportOptions] = None):
        self.options = options or ExportOptions()

    def _builder(self, options: ExportOptions, level: int = 0) -> LineBuilder:
        return LineBuilder(options.indent_size, options.use_tabs, level)

    def generate_document(
        self,
        roots: List[CanonicalNode],
        root_kind: Optional[RootKind] = None,
        options: Optional[ExportOptions] = None,
        info: Optional[DocumentInfo] = None,
    ) -> str:
        """
        Generate a complete markup document.

        Args:
            roots: Top-level canonical nodes
            root_kind: Root element (defaults to ``options.root_kind``)
            options: Export options for this call
            info: Title, design size and resources of the scene

        Returns:
            Markup text (without trailing newline)
        """
        options = options or self.options
        root = RootKind.parse(root_kind) if root_kind is not None else options.root_kind
        info = info or DocumentInfo()
        root_tag = root.value

        builder = self._builder(options)
        builder.line(XML_PREAMBLE)

        header = [f"<{root_tag}"]
        unit = builder.unit
        for declaration in self._namespace_declarations(roots, options):
            header.append(unit + declaration)

        if options.include_design_time_data and root in (RootKind.WINDOW, RootKind.USER_CONTROL):
            header.append(
                f'{unit}d:DesignWidth="{format_number(info.width)}" '
                f'd:DesignHeight="{format_number(info.height)}"'
            )
        if options.class_name:
            header.append(f'{unit}x:Class="{options.namespace}.{options.class_name}"')
        if root == RootKind.WINDOW and options.include_title:
            title = info.title or options.class_name
            if title:
                header.append(f'{unit}Title="{escape_xml(title)}"')
        header[-1] += ">"
        builder.lines(header)

        builder.indent()
        if options.generate_theme:
            builder.blank()
            builder.open(f"<{root_tag}.Styles>")
            builder.line(f'<StyleInclude Source="avares://{options.namespace}/{options.theme_filename}" />')
            builder.close(f"</{root_tag}.Styles>")

        if info.resources:
            builder.blank()
            self._emit_resources(root_tag, info.resources, builder)

        if roots:
            builder.blank()
            self._emit_content(roots, builder, options)
        builder.dedent()

        builder.line(f"</{root_tag}>")
        return builder.render()

    def generate_node(
        self,
        node: CanonicalNode,
        indent_level: int = 0,
        options: Optional[ExportOptions] = None,
    ) -> str:
        """Generate markup for one node (and its subtree) at ``indent_level``."""
        builder = self._builder(options or self.options, indent_level)
        self._emit_node(node, builder, options or self.options)
        return builder.render()

    def used_namespaces(self, roots: List[CanonicalNode]) -> List[Tuple[str, str]]:
        """``(prefix, clr_namespace)`` pairs needed by the tree, first use first."""
        found: Dict[str, str] = {}
        for root in roots:
            for node in root.walk():
                if node.namespace and node.namespace != DEFAULT_NAMESPACE:
                    found.setdefault(namespace_alias(node.namespace), node.namespace)
        return list(found.items())

    def _namespace_declarations(self, roots: List[CanonicalNode], options: ExportOptions) -> List[str]:
        declarations = [
            f'xmlns="{XAML_NAMESPACES["default"]}"',
            f'xmlns:x="{XAML_NAMESPACES["x"]}"',
        ]
        if options.include_design_time_data:
            declarations.append(f'xmlns:d="{XAML_NAMESPACES["d"]}"')
            declarations.append(f'xmlns:mc="{XAML_NAMESPACES["mc"]}"')
            declarations.append('mc:Ignorable="d"')
        if options.namespace:
            declarations.append(f'xmlns:local="clr-namespace:{options.namespace}"')
        for prefix, clr_namespace in self.used_namespaces(roots):
            declarations.append(f'xmlns:{prefix}="using:{clr_namespace}"')
        return declarations

    def _emit_content(self, roots: List[CanonicalNode], builder: LineBuilder, options: ExportOptions):
        positioned = any(
            name in root.attached_properties for root in roots for name in POSITIONING_ATTRIBUTES
        )
        if positioned:
            logger.debug("Wrapping top-level nodes in an implicit Canvas")
            builder.open("<Canvas>")
            for root in roots:
                self._emit_node(root, builder, options)
            builder.close("</Canvas>")
        else:
            for root in roots:
                self._emit_node(root, builder, options)

    def _element_tag(self, node: CanonicalNode) -> str:
        if node.namespace and node.namespace != DEFAULT_NAMESPACE:
            return f"{namespace_alias(node.namespace)}:{node.target_type}"
        return node.target_type

    def _attribute_pairs(self, node: CanonicalNode) -> List[Tuple[str, str]]:
        pairs: List[Tuple[str, str]] = []
        if node.name:
            pairs.append(("x:Name", node.name))
        pairs.extend(node.attributes.items())
        pairs.extend(node.attached_properties.items())
        return pairs

    def _emit_node(self, node: CanonicalNode, builder: LineBuilder, options: ExportOptions):
        if not node.supported:
            self._emit_placeholder(node, builder, options)
            return

        tag = self._element_tag(node)
        attributes = [f'{key}="{escape_xml(value)}"' for key, value in self._attribute_pairs(node)]

        if not node.has_body:
            if not attributes:
                builder.line(f"<{tag} />")
                return
            if len(attributes) <= 2:
                builder.line(f"<{tag} {' '.join(attributes)} />")
                return

        opening = [f"<{tag}"] + [builder.unit + attribute for attribute in attributes]
        if not node.has_body:
            opening[-1] += " />"
            builder.lines(opening)
            return

        opening[-1] += ">"
        builder.lines(opening)
        builder.indent()

        for prop, fragment in node.nested_properties.items():
            builder.open(f"<{tag}.{prop}>")
            self._emit_fragment(fragment, builder)
            builder.close(f"</{tag}.{prop}>")

        for child in node.children:
            self._emit_node(child, builder, options)

        if node.text_content is not None and not node.children:
            text = escape_xml(node.text_content, attribute=False)
            if node.content_property and node.content_property != "Content":
                builder.open(f"<{tag}.{node.content_property}>")
                builder.line(text)
                builder.close(f"</{tag}.{node.content_property}>")
            else:
                builder.line(text)

        builder.close(f"</{tag}>")

    def _emit_placeholder(self, node: CanonicalNode, builder: LineBuilder, options: ExportOptions):
        if options.include_comments:
            builder.line(f"<!-- Unmapped component: {escape_xml(node.source_type, attribute=False)} -->")

        children = list(node.children)
        if len(children) > 1:
            children = [CanonicalNode(target_type="StackPanel", source_type="layout-stackpanel", children=children)]

        stand_in = CanonicalNode(
            target_type="ContentControl",
            source_type=node.source_type,
            name=node.name,
            attributes={"Tag": node.source_type},
            attached_properties=dict(node.attached_properties),
            children=children,
            path=node.path,
        )
        self._emit_node(stand_in, builder, options)

    def _emit_fragment(self, fragment: MarkupFragment, builder: LineBuilder):
        attributes = "".join(f' {key}="{escape_xml(value)}"' for key, value in fragment.attributes)
        if not fragment.children:
            builder.line(f"<{fragment.element}{attributes} />")
            return
        builder.open(f"<{fragment.element}{attributes}>")
        for child in fragment.children:
            self._emit_fragment(child, builder)
        builder.close(f"</{fragment.element}>")

    def _emit_resources(self, root_tag: str, resources: Dict[str, Any], builder: LineBuilder):
        builder.open(f"<{root_tag}.Resources>")
        for key, resource in resources.items():
            key = escape_xml(key)
            if isinstance(resource, str):
                if resource.startswith("#"):
                    builder.line(f'<SolidColorBrush x:Key="{key}" Color="{resource}" />')
                else:
                    builder.line(f'<x:String x:Key="{key}">{escape_xml(resource, attribute=False)}</x:String>')
            elif isinstance(resource, dict) and resource.get("type") == "style":
                selector = resource.get("selector") or resource.get("targetType") or key
                builder.open(f'<Style Selector="{escape_xml(selector)}">')
                for prop, value in (resource.get("setters") or {}).items():
                    builder.line(f'<Setter Property="{prop}" Value="{escape_xml(value)}" />')
                builder.close("</Style>")
            elif isinstance(resource, dict) and (resource.get("type") == "brush" or resource.get("color")):
                builder.line(f'<SolidColorBrush x:Key="{key}" Color="{escape_xml(resource.get("color"))}" />')
            else:
                builder.line(f"<!-- Resource: {key} -->")
        builder.close(f"</{root_tag}.Resources>")


def generate_document(
    roots: List[CanonicalNode],
    root_kind: Optional[RootKind] = None,
    options: Optional[ExportOptions] = None,
    info: Optional[DocumentInfo] = None,
) -> str:
    return MarkupGenerator(options).generate_document(roots, root_kind, options, info)


def generate_node(node: CanonicalNode, indent_level: int = 0, options: Optional[ExportOptions] = None) -> str:
    return MarkupGenerator(options).generate_node(node, indent_level, options)
