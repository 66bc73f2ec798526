"""Tests for codegen: the unit model and the Python emission backend.

Generated modules are compiled and executed against a fake runtime
module (see the fake_runtime fixture) to check they behave, not just
that they look right.
"""

from __future__ import annotations

import ast
import logging
import types
from pathlib import Path

import pytest

from localizer.codegen import (
    AccessorPair,
    CodeModel,
    HolderDeclaration,
    OutputUnit,
    render_unit,
    write_units,
)
from localizer.diagnostics import (
    EmissionError,
    HolderNameCollisionError,
    UnitNameCollisionError,
)


def _unit(name: str = "app.Messages", **templates: tuple[str, int]) -> OutputUnit:
    pairs = tuple(
        AccessorPair.for_key(key.replace("__", "."), template, arity)
        for key, (template, arity) in templates.items()
    )
    return OutputUnit(name=name, source=Path(f"{name}.properties"), accessors=pairs)


def _load(source: str, module_name: str = "app.Messages") -> dict[str, object]:
    namespace: dict[str, object] = {"__name__": module_name}
    exec(compile(source, f"<{module_name}>", "exec"), namespace)  # noqa: S102
    return namespace


# ============================================================================
# MODEL
# ============================================================================


class TestAccessorPair:
    """AccessorPair construction."""

    def test_for_key_derives_names(self) -> None:
        """Both accessor names come from the key."""
        pair = AccessorPair.for_key("greeting.hello", "Hello, {0}!", 1)

        assert pair.identifier == "greeting_hello"
        assert pair.deferred_identifier == "_greeting_hello"

    def test_parameters(self) -> None:
        """Parameters are arg1..argN."""
        assert AccessorPair.for_key("k", "", 3).parameters == ("arg1", "arg2", "arg3")
        assert AccessorPair.for_key("k", "", 0).parameters == ()

    def test_negative_arity_rejected(self) -> None:
        """Arity is never negative."""
        with pytest.raises(ValueError, match="arity"):
            AccessorPair.for_key("k", "", -1)


class TestOutputUnit:
    """OutputUnit validation."""

    def test_identifiers_in_emission_order(self) -> None:
        """Eager then deferred, per key, in table order."""
        unit = _unit(b=("x", 0), a=("y", 0))

        assert unit.identifiers == ["b", "_b", "a", "_a"]

    def test_holder_collision(self) -> None:
        """A key whose deferred accessor is '_holder' is rejected."""
        with pytest.raises(HolderNameCollisionError) as exc_info:
            _unit(holder=("x", 0))

        assert exc_info.value.key == "holder"
        assert exc_info.value.identifier == "_holder"

    @pytest.mark.parametrize("key", ["Localizable", "ResourceBundleHolder"])
    def test_runtime_class_collision(self, key: str) -> None:
        """A key named after an imported runtime class is rejected."""
        pair = AccessorPair.for_key(key, "x", 0)

        with pytest.raises(HolderNameCollisionError) as exc_info:
            OutputUnit(name="app.Messages", source=Path("m.properties"), accessors=(pair,))

        assert exc_info.value.key == key
        assert exc_info.value.identifier == key

    def test_custom_holder_names_are_reserved(self) -> None:
        """Reserved names follow the holder declaration, not the defaults."""
        holder = HolderDeclaration(holder_class="Bundle", localizable_class="Lazy")
        source = Path("m.properties")

        with pytest.raises(HolderNameCollisionError):
            OutputUnit("app.Messages", source, holder, (AccessorPair.for_key("Lazy", "x", 0),))

        unit = OutputUnit(
            "app.Messages", source, holder, (AccessorPair.for_key("Localizable", "x", 0),)
        )
        assert unit.identifiers == ["Localizable", "_Localizable"]


class TestCodeModel:
    """CodeModel collection behaviour."""

    def test_add_and_iterate(self) -> None:
        """Units keep insertion order."""
        model = CodeModel()
        model.add(_unit("b.Second"))
        model.add(_unit("a.First"))

        assert [unit.name for unit in model] == ["b.Second", "a.First"]
        assert len(model) == 2
        assert "a.First" in model
        assert model.units[0].name == "b.Second"

    def test_duplicate_name_rejected(self) -> None:
        """Unit names are unique per model."""
        model = CodeModel()
        model.add(_unit("app.Messages"))

        with pytest.raises(UnitNameCollisionError) as exc_info:
            model.add(OutputUnit("app.Messages", Path("other/app/Messages.properties")))

        assert exc_info.value.unit_name == "app.Messages"
        assert exc_info.value.second == Path("other/app/Messages.properties")


# ============================================================================
# RENDERING
# ============================================================================


class TestRenderUnit:
    """render_unit() source text."""

    def test_module_layout(self) -> None:
        """Header, import, __all__, holder, then accessor pairs."""
        source = render_unit(_unit(greeting__hello=("Hello, {0}!", 1)))

        assert source.startswith('"""Accessors for the app.Messages resource bundle.')
        assert "from localizer_runtime import Localizable, ResourceBundleHolder\n" in source
        assert "_holder = ResourceBundleHolder(__name__)\n" in source
        assert "def greeting_hello(arg1):\n" in source
        assert '    return _holder.format("greeting.hello", arg1)\n' in source
        assert "def _greeting_hello(arg1):\n" in source
        assert '    return Localizable(_holder, "greeting.hello", arg1)\n' in source
        assert source.endswith("\n")

    def test_zero_arity(self) -> None:
        """Arity zero generates parameterless accessors."""
        source = render_unit(_unit(farewell=("Goodbye", 0)))

        assert "def farewell():\n" in source
        assert '    return _holder.format("farewell")\n' in source
        assert '    return Localizable(_holder, "farewell")\n' in source

    def test_empty_unit(self) -> None:
        """A unit with no keys is still a valid module."""
        source = render_unit(_unit())

        assert "__all__: list[str] = []" in source
        ast.parse(source)

    def test_docstrings_escape_markup(self) -> None:
        """'&' and '<' are escaped in both docstrings by default."""
        source = render_unit(_unit(k=("a < b & c", 0)))
        tree = ast.parse(source)
        docs = [
            ast.get_docstring(node)
            for node in tree.body
            if isinstance(node, ast.FunctionDef)
        ]

        assert docs == ["a &lt; b &amp; c", "a &lt; b &amp; c"]

    def test_docstrings_raw_without_escaping(self) -> None:
        """escape_markup=False keeps the template verbatim."""
        source = render_unit(_unit(k=("a < b & c", 0)), escape_markup=False)
        tree = ast.parse(source)
        function = next(node for node in tree.body if isinstance(node, ast.FunctionDef))

        assert ast.get_docstring(function) == "a < b & c"

    @pytest.mark.parametrize(
        "template",
        ['say "hi"', 'ends with "', "back\\slash", 'triple """ quotes', "tab\there", "nul\x00"],
    )
    def test_awkward_templates_stay_valid_python(self, template: str) -> None:
        """Quotes, backslashes and control characters survive in docstrings."""
        source = render_unit(_unit(k=(template, 0)), escape_markup=False)
        tree = ast.parse(source)
        function = next(node for node in tree.body if isinstance(node, ast.FunctionDef))

        assert ast.get_docstring(function, clean=False) == template

    def test_key_with_quotes_is_escaped(self) -> None:
        """Keys are emitted as string literals, whatever they contain."""
        unit = OutputUnit(
            name="app.Messages",
            source=Path("app/Messages.properties"),
            accessors=(AccessorPair("a\"b", "x", 0, "a_b", "_a_b"),),
        )

        assert '_holder.format("a\\"b")' in render_unit(unit)

    def test_custom_runtime_module(self) -> None:
        """The holder's runtime module is configurable."""
        unit = OutputUnit(
            name="app.Messages",
            source=Path("app/Messages.properties"),
            holder=HolderDeclaration(runtime_module="myapp.i18n"),
        )

        assert "from myapp.i18n import Localizable, ResourceBundleHolder" in render_unit(unit)

    def test_warns_on_invalid_identifier(self, caplog: pytest.LogCaptureFixture) -> None:
        """Keys that do not yield identifiers are reported, not rejected."""
        with caplog.at_level(logging.WARNING, logger="localizer.codegen.emitter"):
            render_unit(_unit(**{"class": ("x", 0)}))

        assert "not a valid Python identifier" in caplog.text

    def test_warns_on_collapsing_keys(self, caplog: pytest.LogCaptureFixture) -> None:
        """Keys that differ only in '.' versus '_' are reported."""
        unit = OutputUnit(
            name="app.Messages",
            source=Path("app/Messages.properties"),
            accessors=(
                AccessorPair.for_key("a.b", "x", 0),
                AccessorPair.for_key("a_b", "y", 0),
            ),
        )
        with caplog.at_level(logging.WARNING, logger="localizer.codegen.emitter"):
            render_unit(unit)

        assert "both map to 'a_b'" in caplog.text


class TestGeneratedModuleBehaviour:
    """Generated code executed against the fake runtime."""

    def test_eager_and_deferred_accessors(self, fake_runtime: types.ModuleType) -> None:
        """Eager accessors format through the holder; deferred ones wrap it."""
        namespace = _load(render_unit(_unit(greeting__hello=("Hello, {0}!", 1), farewell=("Bye", 0))))

        holder = namespace["_holder"]
        assert holder.module_name == "app.Messages"  # type: ignore[attr-defined]
        assert namespace["greeting_hello"]("World") == "greeting.hello['World']"  # type: ignore[operator]
        assert namespace["farewell"]() == "farewell[]"  # type: ignore[operator]

        deferred = namespace["_greeting_hello"]("World")  # type: ignore[operator]
        assert isinstance(deferred, fake_runtime.Localizable)
        assert deferred.holder is holder
        assert deferred.key == "greeting.hello"
        assert deferred.args == ("World",)

    def test_arity_is_enforced(self, fake_runtime: types.ModuleType) -> None:
        """Calling with the wrong number of arguments is a TypeError."""
        namespace = _load(render_unit(_unit(pair=("{0} {1}", 2))))

        with pytest.raises(TypeError):
            namespace["pair"]("only one")  # type: ignore[operator]

    def test_all_lists_accessors(self, fake_runtime: types.ModuleType) -> None:
        """__all__ names both accessors of every key."""
        namespace = _load(render_unit(_unit(a__b=("x", 0))))

        assert namespace["__all__"] == ["a_b", "_a_b"]


# ============================================================================
# WRITING
# ============================================================================


class TestWriteUnits:
    """write_units() file output."""

    def test_writes_nested_modules(self, tmp_path: Path) -> None:
        """Each unit lands at its namespace path; directories are created."""
        units = [_unit("org.example.Messages", k=("v", 0)), _unit("Top", k=("v", 0))]

        written = write_units(units, tmp_path / "out")

        assert written == [
            tmp_path / "out" / "org" / "example" / "Messages.py",
            tmp_path / "out" / "Top.py",
        ]
        assert all(path.is_file() for path in written)
        assert not (tmp_path / "out" / "org" / "__init__.py").exists()

    def test_overwrites_existing_module(self, tmp_path: Path) -> None:
        """Existing modules are replaced."""
        target = tmp_path / "app" / "Messages.py"
        target.parent.mkdir(parents=True)
        target.write_text("stale", encoding="utf-8")

        write_units([_unit(k=("v", 0))], tmp_path)

        assert "def k():" in target.read_text(encoding="utf-8")

    def test_unwritable_output_dir(self, tmp_path: Path) -> None:
        """A file in place of the output directory raises EmissionError."""
        blocker = tmp_path / "out"
        blocker.write_text("not a directory", encoding="utf-8")

        with pytest.raises(EmissionError) as exc_info:
            write_units([_unit(k=("v", 0))], blocker)

        assert exc_info.value.path == blocker

    def test_unwritable_unit_path(self, tmp_path: Path) -> None:
        """A file in place of a package directory raises EmissionError."""
        (tmp_path / "app").write_text("not a directory", encoding="utf-8")

        with pytest.raises(EmissionError) as exc_info:
            write_units([_unit(k=("v", 0))], tmp_path)

        assert exc_info.value.path == tmp_path / "app" / "Messages.py"

    def test_unencodable_template(self, tmp_path: Path) -> None:
        """A lone surrogate in a template raises EmissionError, not UnicodeEncodeError."""
        with pytest.raises(EmissionError) as exc_info:
            write_units([_unit(k=("Hi \ud83d", 0))], tmp_path)

        assert exc_info.value.path == tmp_path / "app" / "Messages.py"
        assert isinstance(exc_info.value.__cause__, UnicodeEncodeError)
        assert not (tmp_path / "app" / "Messages.py").exists()
