"""
C# companion source generation.

Generates the code-behind class for an exported view, an optional
view-model whose properties and commands come from the binding
expressions found in the markup, and IValueConverter stubs.
"""

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union

from ...core.builder import LineBuilder
from ...core.config import ExportOptions, RootKind
from ...core.naming import backing_field_name
from ...core.nodes import CanonicalNode, EventBinding
from ...logging_config import get_logger

logger = get_logger(__name__)

BINDING_PATTERN = re.compile(r"^\{(?:Compiled)?Binding\s+(?:Path=)?([A-Za-z_]\w*)")

COMMAND_ATTRIBUTES = frozenset({"Command"})
COMMAND_SUFFIX = "Command"

# Target property -> C# type of the bound view-model property.
PROPERTY_TYPES: Dict[str, str] = {
    "Text": "string",
    "Content": "string",
    "Title": "string",
    "Value": "double",
    "Minimum": "double",
    "Maximum": "double",
    "IsChecked": "bool?",
    "IsEnabled": "bool",
    "IsVisible": "bool",
    "SelectedIndex": "int",
    "SelectedItem": "object?",
    "ItemsSource": "ObservableCollection<object>",
    "Items": "ObservableCollection<object>",
    "SelectedDate": "DateTime?",
    "SelectedTime": "TimeSpan?",
}
DEFAULT_PROPERTY_TYPE = "string"

# Initializers keeping non-nullable reference types valid.
FIELD_INITIALIZERS: Dict[str, str] = {
    "string": "string.Empty",
    "ObservableCollection<object>": "new()",
}

CODE_BEHIND_USINGS = ["Avalonia.Controls", "Avalonia.Markup.Xaml"]

VIEW_MODEL_USINGS = [
    "System",
    "System.Collections.Generic",
    "System.Collections.ObjectModel",
    "System.ComponentModel",
    "System.Runtime.CompilerServices",
    "System.Windows.Input",
]
REACTIVE_UI_USINGS = ["ReactiveUI", "System.Reactive"]
TOOLKIT_USINGS = ["CommunityToolkit.Mvvm.ComponentModel", "CommunityToolkit.Mvvm.Input"]

VIEW_MODEL_BASES = {
    "plain": "INotifyPropertyChanged",
    "reactiveui": "ReactiveObject",
    "toolkit": "ObservableObject",
}

CONVERTER_USINGS = ["System", "System.Globalization", "Avalonia", "Avalonia.Data.Converters"]


@dataclass(frozen=True)
class BoundProperty:
    """View-model property referenced by a binding expression."""

    name: str
    type: str
    target: str

    @property
    def field_name(self) -> str:
        return backing_field_name(self.name)


def binding_target(value: str) -> Optional[str]:
    """Property name referenced by a ``{Binding Name...}`` expression."""
    match = BINDING_PATTERN.match(value.strip())
    return match.group(1) if match else None


@dataclass(frozen=True)
class BoundCommand:
    """View-model command bound on a ``Command`` attribute."""

    name: str

    @property
    def stem(self) -> str:
        """``SaveCommand`` -> ``Save``; names without the suffix are kept."""
        if self.name.endswith(COMMAND_SUFFIX) and len(self.name) > len(COMMAND_SUFFIX):
            return self.name[: -len(COMMAND_SUFFIX)]
        return self.name

    @property
    def has_suffix(self) -> bool:
        return self.stem != self.name


def infer_property_type(target_property: str) -> str:
    return PROPERTY_TYPES.get(target_property, DEFAULT_PROPERTY_TYPE)


def _walk(roots: Iterable[CanonicalNode]) -> Iterable[CanonicalNode]:
    for root in roots:
        yield from root.walk()


def _bound_values(node: CanonicalNode) -> Iterable:
    yield from node.attributes.items()
    if node.text_content is not None:
        yield node.content_property or "Content", node.text_content


def collect_event_handlers(roots: Iterable[CanonicalNode]) -> List[EventBinding]:
    """Event bindings in depth-first order, deduplicated by handler name."""
    handlers: Dict[str, EventBinding] = {}
    for node in _walk(roots):
        for event in node.events:
            handlers.setdefault(event.handler, event)
    return list(handlers.values())


def collect_bound_properties(roots: Iterable[CanonicalNode]) -> List[BoundProperty]:
    """
    View-model properties referenced by bindings.

    The first binding of a name decides its type; command attributes
    never produce properties.

    Args:
        roots: Canonical trees

    Returns:
        Properties in first-discovery order
    """
    found: Dict[str, BoundProperty] = {}
    for node in _walk(roots):
        for target, value in _bound_values(node):
            if target in COMMAND_ATTRIBUTES or not isinstance(value, str):
                continue
            name = binding_target(value)
            if name and name not in found:
                found[name] = BoundProperty(name, infer_property_type(target), target)
    return list(found.values())


def collect_commands(roots: Iterable[CanonicalNode]) -> List[BoundCommand]:
    """
    Commands bound on ``Command`` attributes, first-discovery order.

    Any binding on a command attribute counts, whether or not the bound
    name ends in ``Command``.
    """
    found: Dict[str, BoundCommand] = {}
    for node in _walk(roots):
        for target in COMMAND_ATTRIBUTES:
            value = node.attributes.get(target)
            if not isinstance(value, str):
                continue
            name = binding_target(value)
            if name and name not in found:
                found[name] = BoundCommand(name)
    return list(found.values())


class CompanionGenerator:
    """Builds C# companion files with :class:`LineBuilder`."""

    def __init__(self, options: Optional[ExportOptions] = None):
        self.options = options or ExportOptions()

    def _builder(self, options: ExportOptions) -> LineBuilder:
        return LineBuilder(options.indent_size, options.use_tabs)

    def _usings(self, builder: LineBuilder, namespaces: Iterable[str]):
        for namespace in namespaces:
            builder.line(f"using {namespace};")
        builder.blank()

    # Code-behind

    def generate_companion_source(
        self,
        roots: List[CanonicalNode],
        class_name: Optional[str] = None,
        root_kind: Optional[Union[str, RootKind]] = None,
        has_view_model: bool = False,
        options: Optional[ExportOptions] = None,
    ) -> str:
        """
        Generate the code-behind class of an exported view.

        Args:
            roots: Canonical trees of the view
            class_name: Class name (defaults to ``options.class_name``)
            root_kind: Base class (defaults to ``options.root_kind``)
            has_view_model: Assign a new view-model as DataContext
            options: Export options for this call

        Returns:
            C# source without trailing newline
        """
        options = options or self.options
        class_name = class_name or options.class_name
        root = RootKind.parse(root_kind) if root_kind is not None else options.root_kind
        handlers = collect_event_handlers(roots)

        usings = list(CODE_BEHIND_USINGS)
        if root == RootKind.WINDOW or any(h.args_type == "RoutedEventArgs" for h in handlers):
            usings.append("Avalonia.Interactivity")
        if has_view_model:
            usings.append(f"{options.namespace}.ViewModels")

        builder = self._builder(options)
        self._usings(builder, usings)
        builder.line(f"namespace {options.namespace}")
        builder.open("{")
        builder.line(f"public partial class {class_name} : {root.value}")
        builder.open("{")

        builder.line(f"public {class_name}()")
        builder.open("{")
        builder.line("InitializeComponent();")
        if has_view_model:
            builder.line(f"DataContext = new {class_name}ViewModel();")
        builder.close("}")

        for handler in handlers:
            builder.blank()
            self._event_handler(builder, handler, options)

        builder.close("}")
        builder.close("}")
        logger.debug(f"Code-behind for {class_name}: {len(handlers)} handler(s)")
        return builder.render()

    def _event_handler(self, builder: LineBuilder, handler: EventBinding, options: ExportOptions):
        if options.include_comments:
            builder.line("/// <summary>")
            builder.line(f"/// Handles {handler.event} for {handler.component}")
            builder.line("/// </summary>")
        builder.line(f"private void {handler.handler}(object? sender, {handler.args_type} e)")
        builder.open("{")
        builder.line(f"// TODO: Implement {handler.handler}")
        builder.close("}")

    # View-model

    def generate_view_model_source(
        self,
        roots: List[CanonicalNode],
        class_name: Optional[str] = None,
        options: Optional[ExportOptions] = None,
    ) -> str:
        """
        Generate the view-model backing the bindings of a view.

        Args:
            roots: Canonical trees of the view
            class_name: View class name; ``ViewModel`` is appended
            options: Export options (selects the MVVM idiom)

        Returns:
            C# source without trailing newline
        """
        options = options or self.options
        view_model = f"{class_name or options.class_name}ViewModel"
        idiom = options.mvvm_idiom
        properties = collect_bound_properties(roots)
        commands = collect_commands(roots)

        usings = list(VIEW_MODEL_USINGS)
        if idiom == "reactiveui":
            usings.extend(REACTIVE_UI_USINGS)
        elif idiom == "toolkit":
            usings.extend(TOOLKIT_USINGS)

        builder = self._builder(options)
        self._usings(builder, usings)
        builder.line(f"namespace {options.namespace}.ViewModels")
        builder.open("{")
        modifier = "public partial class" if idiom == "toolkit" else "public class"
        builder.line(f"{modifier} {view_model} : {VIEW_MODEL_BASES[idiom]}")
        builder.open("{")

        builder.line(f"public {view_model}()")
        builder.open("{")
        if options.include_comments:
            builder.line("// Initialize commands and collections")
        for command in commands:
            name, stem = command.name, command.stem
            if idiom == "plain":
                builder.line(f"{name} = new RelayCommand(Execute{stem}, CanExecute{stem});")
            elif idiom == "reactiveui":
                builder.line(f"{name} = ReactiveCommand.Create(Execute{stem});")
            elif not command.has_suffix:
                builder.line(f"{name} = new RelayCommand(Execute{stem});")
        builder.close("}")

        for prop in properties:
            builder.blank()
            self._property(builder, prop, idiom)

        for command in commands:
            builder.blank()
            self._command(builder, command, idiom)

        if idiom == "plain":
            builder.blank()
            self._property_changed(builder)
            if commands:
                builder.blank()
                self._relay_command(builder)

        builder.close("}")
        builder.close("}")
        logger.debug(f"{view_model}: {len(properties)} properties, {len(commands)} commands ({idiom})")
        return builder.render()

    def _property(self, builder: LineBuilder, prop: BoundProperty, idiom: str):
        initializer = FIELD_INITIALIZERS.get(prop.type)
        declaration = f"private {prop.type} {prop.field_name}"
        if initializer:
            declaration += f" = {initializer}"

        if idiom == "toolkit":
            builder.line("[ObservableProperty]")
            builder.line(declaration + ";")
            return

        builder.line(declaration + ";")
        builder.line(f"public {prop.type} {prop.name}")
        builder.open("{")
        builder.line(f"get => {prop.field_name};")
        if idiom == "reactiveui":
            builder.line(f"set => this.RaiseAndSetIfChanged(ref {prop.field_name}, value);")
        else:
            builder.line("set")
            builder.open("{")
            builder.line(f"if ({prop.field_name} != value)")
            builder.open("{")
            builder.line(f"{prop.field_name} = value;")
            builder.line(f"OnPropertyChanged(nameof({prop.name}));")
            builder.close("}")
            builder.close("}")
        builder.close("}")

    def _command(self, builder: LineBuilder, command: BoundCommand, idiom: str):
        name, stem = command.name, command.stem
        if idiom == "toolkit" and command.has_suffix:
            builder.line("[RelayCommand]")
            builder.line(f"private void {stem}()")
            builder.open("{")
            builder.line(f"// TODO: Implement {stem}")
            builder.close("}")
            return

        if idiom == "reactiveui":
            builder.line(f"public ReactiveCommand<Unit, Unit> {name} {{ get; }}")
        elif idiom == "toolkit":
            builder.line(f"public IRelayCommand {name} {{ get; }}")
        else:
            builder.line(f"public ICommand {name} {{ get; }}")
        builder.blank()
        builder.line(f"private void Execute{stem}()")
        builder.open("{")
        builder.line(f"// TODO: Implement {stem}")
        builder.close("}")

        if idiom == "plain":
            builder.blank()
            builder.line(f"private bool CanExecute{stem}()")
            builder.open("{")
            builder.line("return true;")
            builder.close("}")

    def _property_changed(self, builder: LineBuilder):
        builder.line("public event PropertyChangedEventHandler? PropertyChanged;")
        builder.blank()
        builder.line("protected virtual void OnPropertyChanged([CallerMemberName] string? propertyName = null)")
        builder.open("{")
        builder.line("PropertyChanged?.Invoke(this, new PropertyChangedEventArgs(propertyName));")
        builder.close("}")

    def _relay_command(self, builder: LineBuilder):
        builder.line("private sealed class RelayCommand : ICommand")
        builder.open("{")
        builder.line("private readonly Action _execute;")
        builder.line("private readonly Func<bool> _canExecute;")
        builder.blank()
        builder.line("public RelayCommand(Action execute, Func<bool> canExecute)")
        builder.open("{")
        builder.line("_execute = execute;")
        builder.line("_canExecute = canExecute;")
        builder.close("}")
        builder.blank()
        builder.line("public event EventHandler? CanExecuteChanged;")
        builder.blank()
        builder.line("public bool CanExecute(object? parameter) => _canExecute();")
        builder.blank()
        builder.line("public void Execute(object? parameter) => _execute();")
        builder.blank()
        builder.line("public void RaiseCanExecuteChanged() => CanExecuteChanged?.Invoke(this, EventArgs.Empty);")
        builder.close("}")

    # Converters

    def generate_converter(
        self,
        name: str,
        source_type: str,
        target_type: str,
        options: Optional[ExportOptions] = None,
    ) -> str:
        """IValueConverter stub converting ``source_type`` values to ``target_type``."""
        options = options or self.options
        builder = self._builder(options)
        self._usings(builder, CONVERTER_USINGS)
        builder.line(f"namespace {options.namespace}.Converters")
        builder.open("{")
        builder.line(f"public class {name} : IValueConverter")
        builder.open("{")

        builder.line(
            "public object? Convert(object? value, Type targetType, object? parameter, CultureInfo culture)"
        )
        builder.open("{")
        builder.line(f"if (value is {source_type} source)")
        builder.open("{")
        builder.line(f"// TODO: Convert {source_type} to {target_type}")
        builder.line(f"return default({target_type});")
        builder.close("}")
        builder.line("return AvaloniaProperty.UnsetValue;")
        builder.close("}")
        builder.blank()
        builder.line(
            "public object? ConvertBack(object? value, Type targetType, object? parameter, CultureInfo culture)"
        )
        builder.open("{")
        builder.line("throw new NotImplementedException();")
        builder.close("}")

        builder.close("}")
        builder.close("}")
        return builder.render()


def generate_companion_source(
    roots: List[CanonicalNode],
    class_name: Optional[str] = None,
    root_kind: Optional[Union[str, RootKind]] = None,
    has_view_model: bool = False,
    options: Optional[ExportOptions] = None,
) -> str:
    return CompanionGenerator(options).generate_companion_source(
        roots, class_name, root_kind, has_view_model, options
    )


def generate_view_model_source(
    roots: List[CanonicalNode],
    class_name: Optional[str] = None,
    options: Optional[ExportOptions] = None,
) -> str:
    return CompanionGenerator(options).generate_view_model_source(roots, class_name, options)


def generate_converter(
    name: str, source_type: str, target_type: str, options: Optional[ExportOptions] = None
) -> str:
    return CompanionGenerator(options).generate_converter(name, source_type, target_type, options)
