"""Renders a compiled TypeRegistry as a Python module of pydantic models.

Supports custom templates via the template_dir parameter:
    generator = CodeGenerator(registry, template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import ast
import keyword
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .compiler import CompiledType, FieldType, Modifier, TypeRegistry
from .ir import TypeKind
from .validator import BoundQuery


def snake_case(name: str) -> str:
    """Convert PascalCase or camelCase to snake_case."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def safe_docstring(text: str) -> str:
    """Escape text for use in docstrings."""
    if not text:
        return ""
    text = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    if text.endswith('"'):
        text += " "
    return text


def safe_comment(text: str) -> str:
    """Collapse text onto one line for a ``#`` comment."""
    if not text:
        return ""
    text = re.sub(r"\s+", " ", text)
    if len(text) > 120:
        text = text[:117] + "..."
    return text.strip()


def safe_identifier(name: str) -> str:
    """Suffix Python keywords with an underscore."""
    if keyword.iskeyword(name):
        return f"{name}_"
    return name


def attribute_name(name: str) -> str:
    """Model attribute for a GraphQL field name.

    pydantic treats leading underscores as private, so they are dropped;
    the GraphQL name survives as the field alias.
    """
    return safe_identifier(snake_case(name).lstrip("_") or "field_")


def attribute_names(compiled: CompiledType) -> Dict[str, str]:
    """Map each field of ``compiled`` to a distinct model attribute.

    Fields like ``fooBar`` and ``foo_bar`` share a snake_case form; later
    ones get a numeric suffix (``foo_bar_2``) so none is lost.
    """
    used = {"model_config"}
    names = {}
    for field in compiled.fields:
        base = attribute_name(field.name)
        candidate = base
        n = 2
        while candidate in used:
            candidate = f"{base}_{n}"
            n += 1
        used.add(candidate)
        names[field.name] = candidate
    return names


def module_alias(module: str) -> str:
    """Import alias for a module referenced by generated annotations."""
    return "_" + module.replace(".", "_")


class CodeGenerator:
    """Generates a models module from a compiled registry.

    Available templates to override:
        - models.py.j2: enums, unions, scalars and pydantic models

    Example:
        generator = CodeGenerator(provider.registry, queries=bound, source=url)
        generator.write("./client/models.py")
    """

    def __init__(
        self,
        registry: TypeRegistry,
        queries: Optional[Mapping[str, BoundQuery]] = None,
        source: str = "",
        template_dir: Optional[str] = None,
    ):
        """Initialize the code generator.

        Args:
            registry: The compiled types to render
            queries: Bound queries whose texts are emitted in ``QUERIES``
            source: Where the schema came from, for the module docstring
            template_dir: Optional directory with custom Jinja2 templates.
                          Templates here override the built-in templates.
        """
        self.registry = registry
        self.queries = dict(queries or {})
        self.source = source

        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_provider", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["snake_case"] = snake_case
        self.env.filters["repr"] = repr
        self.env.filters["safe_docstring"] = safe_docstring
        self.env.filters["safe_comment"] = safe_comment
        self.env.filters["identifier"] = safe_identifier
        self.env.filters["attribute_name"] = attribute_name
        self.env.filters["attribute_names"] = attribute_names
        self.env.filters["annotation"] = self.annotation

    def python_type_name(self, py_type: type) -> str:
        """How generated code refers to a native type, e.g. ``_datetime.datetime``."""
        if py_type.__module__ == "builtins":
            return py_type.__qualname__
        return f"{module_alias(py_type.__module__)}.{py_type.__qualname__}"

    def imports(self) -> List[Tuple[str, str]]:
        """(module, alias) pairs for native types outside builtins."""
        modules = {
            t.python_type.__module__
            for t in self.registry.values()
            if t.python_type is not None and t.python_type.__module__ != "builtins"
        }
        return [(module, module_alias(module)) for module in sorted(modules)]

    def annotation(self, field_type: FieldType) -> str:
        """Python type annotation for a field, e.g. ``_t.Optional[_t.List[Person]]``."""
        compiled = self.registry.resolve(field_type)
        if compiled.python_type is not None:
            rendered = self.python_type_name(compiled.python_type)
        else:
            rendered = compiled.name

        optional = True
        for modifier in reversed(field_type.modifiers):
            if modifier is Modifier.NON_NULL:
                optional = False
                continue
            if optional:
                rendered = f"_t.Optional[{rendered}]"
            rendered = f"_t.List[{rendered}]"
            optional = True
        if optional:
            rendered = f"_t.Optional[{rendered}]"
        return rendered

    def _context(self) -> Dict[str, Any]:
        models = [
            t for t in self.registry.generated()
            if t.kind in (TypeKind.OBJECT, TypeKind.INTERFACE, TypeKind.INPUT_OBJECT)
        ]
        return {
            "source": self.source,
            "imports": self.imports(),
            "scalars": self.registry.by_kind(TypeKind.SCALAR),
            "enums": self.registry.by_kind(TypeKind.ENUM),
            "unions": self.registry.by_kind(TypeKind.UNION),
            "models": models,
            "queries": sorted((name, q.query) for name, q in self.queries.items()),
        }

    def render(self, template_name: str = "models.py.j2") -> str:
        """Render the module and check that it is valid Python."""
        template = self.env.get_template(template_name)
        content = template.render(self._context())
        try:
            ast.parse(content)
        except SyntaxError as e:
            raise ValueError(
                f"Generated invalid Python: {e}\nTemplate: {template_name}"
            ) from e
        return content

    def write(self, output_path: str) -> Path:
        """Render and write the module to ``output_path``."""
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render())
        return path
