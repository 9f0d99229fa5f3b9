"""
Scene to canonical-node normalization.

Resolves a mapping for every scene node, runs its properties through the
converter rules and produces :class:`CanonicalNode` trees whose
attributes are already in emission order. Everything here is per call:
options, diagnostics and the names handed out live in a
:class:`NormalizeContext` created by :meth:`TreeNormalizer.normalize`.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

from ...core.config import ExportOptions
from ...core.generator import Diagnostic, DiagnosticKind
from ...core.naming import NameSanitizer, NamingCase, is_valid_identifier, to_pascal_case
from ...core.nodes import CanonicalNode, EventBinding, MarkupFragment, Scene, SceneError, SceneNode, parse_scene
from ...logging_config import get_logger
from .aliases import ComponentAlias, property_name, resolve_alias
from .converters import (
    OPTIONAL_RESULT_KINDS,
    ConversionError,
    ConverterKind,
    ConverterSet,
    get_converter_set,
    stringify,
)
from .mappings import (
    ATTACHED_OWNERS,
    ATTACHED_RULES,
    COMMON_RULES,
    LAYOUT_RULES,
    LAYOUT_TARGET_ORDER,
    Mapping,
    PropertyRule,
    generic_mapping,
    lookup_by_source_type,
    lookup_by_target_element,
)

logger = get_logger(__name__)

EVENT_ARGS = {
    "Click": "RoutedEventArgs",
    "SelectionChanged": "SelectionChangedEventArgs",
    "TextChanged": "TextChangedEventArgs",
}

# Loose transform keys folded into one ``transform`` value.
TRANSFORM_KEYS = ("rotation", "scale", "skew", "translateOffset")

# Bag keys read by the normalizer itself rather than by a rule.
STRUCTURAL_KEYS = frozenset({"styleClass", "name", "x", "y"})

ITEM_CONTAINERS = {"ComboBox": "ComboBoxItem", "ListBox": "ListBoxItem"}

_ATTACHED_TARGETS = frozenset(r.target for r in ATTACHED_RULES)
_LAYOUT_TARGETS = frozenset(LAYOUT_TARGET_ORDER)


@dataclass
class NormalizeContext:
    """State of one normalization call."""

    options: ExportOptions
    diagnostics: List[Diagnostic] = field(default_factory=list)
    used_names: Set[str] = field(default_factory=set)
    sanitizer: NameSanitizer = field(default_factory=NameSanitizer)

    def report(self, kind: DiagnosticKind, message: str, path: str = ""):
        logger.warning(f"{message} ({path or 'scene'})")
        self.diagnostics.append(Diagnostic(kind, message, path))


@dataclass
class _Sections:
    """Attribute buckets of one node, merged in emission order at the end."""

    mapped: Dict[str, str] = field(default_factory=dict)
    layout: Dict[str, str] = field(default_factory=dict)
    attached: Dict[str, str] = field(default_factory=dict)
    nested: Dict[str, MarkupFragment] = field(default_factory=dict)
    seen_targets: Set[str] = field(default_factory=set)

    def ordered_attributes(self) -> Dict[str, str]:
        attributes = dict(self.mapped)
        for target in LAYOUT_TARGET_ORDER:
            if target in self.layout:
                attributes[target] = self.layout[target]
        return attributes


def resolve_mapping(node: SceneNode) -> Tuple[Optional[Mapping], Optional[ComponentAlias]]:
    """
    Find the mapping for a scene node.

    Order: explicit target type, generic alias, source type.

    Returns:
        ``(mapping, alias)``; mapping is ``None`` for unsupported nodes
    """
    if node.target_type:
        return lookup_by_target_element(node.target_type) or generic_mapping(node.target_type), None

    alias = resolve_alias(node.type)
    if alias is not None:
        mapping = None
        if alias.mapping_source:
            mapping = lookup_by_source_type(alias.mapping_source)
        if mapping is None:
            mapping = lookup_by_target_element(alias.target_element)
        if mapping is None:
            mapping = generic_mapping(alias.target_element, alias.target_namespace)
        return mapping, alias

    return lookup_by_source_type(node.type), None


class TreeNormalizer:
    """Builds canonical node trees from scenes."""

    def __init__(self, converters: Optional[ConverterSet] = None):
        self.converters = converters or get_converter_set()

    def normalize(
        self,
        scene: Any,
        options: Optional[ExportOptions] = None,
        diagnostics: Optional[List[Diagnostic]] = None,
    ) -> List[CanonicalNode]:
        """
        Normalize a scene into canonical nodes.

        Args:
            scene: Raw scene data or parsed :class:`Scene`
            options: Export options
            diagnostics: List that receives recovered problems

        Returns:
            Top-level canonical nodes in scene order

        Raises:
            SceneError: If the scene is malformed or nested too deeply
        """
        options = options or ExportOptions()
        if not isinstance(scene, Scene):
            scene = parse_scene(scene, options.max_depth)

        context = NormalizeContext(options)
        roots = [self._normalize_node(node, context, 0, None) for node in scene.nodes]

        if diagnostics is not None:
            diagnostics.extend(context.diagnostics)
        logger.debug(f"Normalized {len(roots)} top-level nodes, {len(context.diagnostics)} diagnostics")
        return roots

    def _normalize_node(
        self,
        node: SceneNode,
        context: NormalizeContext,
        depth: int,
        parent_element: Optional[str],
    ) -> CanonicalNode:
        if depth >= context.options.max_depth:
            raise SceneError(
                f"Scene nesting exceeds maximum depth of {context.options.max_depth} at {node.path}"
            )

        mapping, alias = resolve_mapping(node)
        bag = self._property_bag(node, alias)

        if mapping is None:
            context.report(
                DiagnosticKind.UNMAPPED_COMPONENT,
                f"No Avalonia mapping for component type '{node.type}'",
                node.path,
            )
            placeholder = CanonicalNode(
                target_type=node.type,
                source_type=node.type,
                name=self._element_name(node, bag, context),
                supported=False,
                path=node.path,
            )
            sections = _Sections()
            self._apply_rules(ATTACHED_RULES, bag, set(), sections, placeholder, context)
            placeholder.attached_properties = dict(sections.attached)
            placeholder.children = [
                self._normalize_node(child, context, depth + 1, None) for child in node.children
            ]
            return placeholder

        canonical = CanonicalNode(
            target_type=mapping.target_element,
            source_type=node.type,
            name=self._element_name(node, bag, context),
            content_property=mapping.content_property,
            namespace=mapping.target_namespace,
            path=node.path,
        )

        sections = _Sections()
        style_class = self._style_class(bag, alias, mapping, context.options)
        if style_class:
            sections.mapped["Classes"] = style_class

        self._place_content(node, bag, mapping, canonical, sections)

        consumed: Set[str] = set()
        item_children = self._item_children(bag, mapping, consumed)

        self._apply_rules(mapping.rules, bag, consumed, sections, canonical, context)
        for target, value in mapping.fixed_attributes:
            if target not in sections.seen_targets:
                sections.mapped[target] = value
                sections.seen_targets.add(target)
        self._apply_rules(COMMON_RULES, bag, consumed, sections, canonical, context)
        self._apply_rules(LAYOUT_RULES, bag, consumed, sections, canonical, context)
        self._apply_rules(ATTACHED_RULES, bag, consumed, sections, canonical, context)

        self._leftover_properties(node, bag, consumed, mapping, sections, context)
        self._check_attached_owners(sections.attached, parent_element, node.path, context)

        canonical.attributes = sections.ordered_attributes()
        canonical.attached_properties = dict(sections.attached)
        canonical.nested_properties = dict(sections.nested)
        canonical.children = item_children + [
            self._normalize_node(child, context, depth + 1, mapping.target_element)
            for child in node.children
        ]

        if canonical.text_content is not None and canonical.children:
            context.report(
                DiagnosticKind.IGNORED_PROPERTY,
                f"Text content ignored on {mapping.target_element} with children",
                f"{node.path}/content",
            )
        return canonical

    def _property_bag(self, node: SceneNode, alias: Optional[ComponentAlias]) -> Dict[str, Any]:
        bag: Dict[str, Any] = dict(alias.preset_properties) if alias else {}
        bag.update(node.properties)

        if node.x and "canvasLeft" not in bag:
            bag["canvasLeft"] = node.x
        if node.y and "canvasTop" not in bag:
            bag["canvasTop"] = node.y

        if "transform" not in bag and any(key in bag for key in TRANSFORM_KEYS):
            bag["transform"] = {key: bag.pop(key) for key in TRANSFORM_KEYS if key in bag}
        return bag

    def _element_name(self, node: SceneNode, bag: Dict[str, Any], context: NormalizeContext) -> Optional[str]:
        name = node.name or bag.get("name")
        if not name:
            return None
        name = str(name)
        if not is_valid_identifier(name):
            name = context.sanitizer.sanitize_name(name, NamingCase.PASCAL_CASE)

        unique = name
        counter = 2
        while unique in context.used_names:
            unique = f"{name}{counter}"
            counter += 1
        if unique != name:
            context.report(
                DiagnosticKind.IGNORED_PROPERTY,
                f"Duplicate element name '{name}' renamed to '{unique}'",
                node.path,
            )
        context.used_names.add(unique)
        return unique

    def _style_class(
        self,
        bag: Dict[str, Any],
        alias: Optional[ComponentAlias],
        mapping: Mapping,
        options: ExportOptions,
    ) -> Optional[str]:
        explicit = bag.get("styleClass") or (alias.style_class if alias else None)
        if explicit:
            return str(explicit)
        if options.generate_theme and mapping.style_class:
            return mapping.style_class
        return None

    def _place_content(
        self,
        node: SceneNode,
        bag: Dict[str, Any],
        mapping: Mapping,
        canonical: CanonicalNode,
        sections: _Sections,
    ):
        """Route a node-level ``content``/``text`` into a rule or the element body."""
        if node.content is None or node.content == "":
            return

        targets = [mapping.content_property] if mapping.content_property else ["Text", "Content"]
        for candidate in targets:
            for rule in mapping.rules:
                if rule.target == candidate:
                    bag.setdefault(rule.source, node.content)
                    return

        if mapping.content_property in ("Content", "Text"):
            sections.mapped[mapping.content_property] = stringify(node.content)
            sections.seen_targets.add(mapping.content_property)
            return

        canonical.text_content = stringify(node.content)

    def _item_children(self, bag: Dict[str, Any], mapping: Mapping, consumed: Set[str]) -> List[CanonicalNode]:
        item_element = ITEM_CONTAINERS.get(mapping.target_element)
        items = bag.get("items")
        if item_element is None or not isinstance(items, (list, tuple)):
            return []

        consumed.add("items")
        return [
            CanonicalNode(
                target_type=item_element,
                source_type="item",
                attributes={"Content": stringify(item)},
                namespace=mapping.target_namespace,
            )
            for item in items
        ]

    def _apply_rules(
        self,
        rules: Tuple[PropertyRule, ...],
        bag: Dict[str, Any],
        consumed: Set[str],
        sections: _Sections,
        canonical: CanonicalNode,
        context: NormalizeContext,
    ):
        for rule in rules:
            if rule.source not in bag or rule.source in consumed:
                continue
            consumed.add(rule.source)

            value = bag[rule.source]
            if value is None or value == "" or rule.target in sections.seen_targets:
                continue

            if rule.converter == ConverterKind.EVENT_HANDLER:
                self._apply_event(rule, value, sections, canonical, context)
                continue

            path = f"{canonical.path}/properties/{rule.source}"
            try:
                result = self.converters.convert_strict(value, rule.converter, context.options)
            except ConversionError as e:
                context.report(
                    DiagnosticKind.CONVERSION_FAILED,
                    f"Could not convert '{rule.source}' for {canonical.target_type}: {e}",
                    path,
                )
                continue

            if result is None:
                if rule.converter not in OPTIONAL_RESULT_KINDS:
                    context.report(
                        DiagnosticKind.CONVERSION_FAILED,
                        f"Property '{rule.source}' produced no value for {canonical.target_type}",
                        path,
                    )
                continue

            sections.seen_targets.add(rule.target)
            if rule.default is not None and result == self.converters.convert(
                rule.default, rule.converter, context.options
            ):
                continue

            if isinstance(result, MarkupFragment):
                sections.nested[rule.target] = result
            elif rule.target in _ATTACHED_TARGETS:
                sections.attached[rule.target] = result
            elif rule.target in _LAYOUT_TARGETS:
                sections.layout[rule.target] = result
            else:
                sections.mapped[rule.target] = result

    def _apply_event(
        self,
        rule: PropertyRule,
        value: Any,
        sections: _Sections,
        canonical: CanonicalNode,
        context: NormalizeContext,
    ):
        if value is False:
            return

        component = canonical.name or canonical.target_type
        handler = self.converters.convert(value, rule.converter, context.options)
        if handler is None:
            if value is not True:
                context.report(
                    DiagnosticKind.CONVERSION_FAILED,
                    f"Invalid handler for '{rule.source}' on {canonical.target_type}",
                    f"{canonical.path}/properties/{rule.source}",
                )
                return
            handler = f"On{to_pascal_case(component)}{rule.target}"

        sections.mapped[rule.target] = handler
        sections.seen_targets.add(rule.target)
        canonical.events.append(
            EventBinding(
                event=rule.target,
                handler=handler,
                args_type=EVENT_ARGS.get(rule.target, "RoutedEventArgs"),
                component=component,
            )
        )

    def _leftover_properties(
        self,
        node: SceneNode,
        bag: Dict[str, Any],
        consumed: Set[str],
        mapping: Mapping,
        sections: _Sections,
        context: NormalizeContext,
    ):
        """Pass unknown properties through on generic mappings, report them otherwise."""
        is_generic = mapping.source_type.startswith("generic-")

        for key, value in bag.items():
            if key in consumed or key in STRUCTURAL_KEYS or value is None or value == "":
                continue

            if is_generic and not isinstance(value, (dict, list, tuple)):
                target = property_name(key, node.type)
                if target not in sections.seen_targets:
                    sections.mapped[target] = self.converters.convert(value, ConverterKind.STRING, context.options)
                    sections.seen_targets.add(target)
                continue

            context.report(
                DiagnosticKind.IGNORED_PROPERTY,
                f"Property '{key}' has no mapping on {mapping.target_element}",
                f"{node.path}/properties/{key}",
            )

    def _check_attached_owners(
        self,
        attached: Dict[str, str],
        parent_element: Optional[str],
        path: str,
        context: NormalizeContext,
    ):
        if parent_element is None:
            return
        allowed = ATTACHED_OWNERS.get(parent_element, ())
        for name in attached:
            if name.startswith("Panel.") or name in allowed:
                continue
            context.report(
                DiagnosticKind.IGNORED_PROPERTY,
                f"Attached property {name} has no effect inside {parent_element}",
                path,
            )


def normalize(
    scene: Any,
    options: Optional[ExportOptions] = None,
    diagnostics: Optional[List[Diagnostic]] = None,
) -> List[CanonicalNode]:
    """Normalize a scene with a fresh :class:`TreeNormalizer`."""
    return TreeNormalizer().normalize(scene, options, diagnostics)
