from __future__ import annotations

from textwrap import dedent

from artifacts.models import GeneralKind, SymbolHint
from extract.classifier import (
    arrow_candidate_names,
    classify,
    classify_factory_variable,
    is_nested_in_function,
)
from parse.treesitter_tree import SourceTree


def _tree(source: str, name: str = "/ws/src/c.ts") -> SourceTree:
    return SourceTree(name, dedent(source).lstrip("\n").encode("utf8"))


def _arrows(tree: SourceTree) -> list:
    return tree.descendants_of_type(tree.root_node, "arrow_function")


def test_arrow_names_come_from_the_immediate_parent() -> None:
    tree = _tree(
        """
        let handler;
        handler = () => {
          return 1;
        };
        const routes = { onLoad: () => 2 };
        register(() => 3);
        """
    )

    names = [arrow_candidate_names(arrow)[0] for arrow in _arrows(tree)]

    assert names == [["handler"], ["onLoad"], ["register"]]
    assert all(classify(arrow) is not None for arrow in _arrows(tree))


def test_arrow_passed_to_member_call_is_anonymous() -> None:
    tree = _tree('app.get("/", () => 1);\n')

    (arrow,) = _arrows(tree)

    assert arrow_candidate_names(arrow) == ([], None)
    assert classify(arrow) is None


def test_arrow_inside_function_is_nested() -> None:
    tree = _tree(
        """
        function outer() {
          const inner = () => 1;
          return inner;
        }
        """
    )

    (arrow,) = _arrows(tree)

    assert is_nested_in_function(arrow)
    assert classify(arrow) is None


def test_class_property_arrow_names_its_class() -> None:
    tree = _tree(
        """
        class Panel {
          refresh = () => {
            return 1;
          };
        }
        """
    )

    (arrow,) = _arrows(tree)
    classification = classify(arrow)

    assert classification is not None
    assert classification.hint is SymbolHint.CLASS_ARROW_FUNCTION
    assert classification.enclosing_type == "Panel"
    assert classification.local_name == "refresh"


def test_factory_variable_requires_direct_call() -> None:
    tree = _tree(
        """
        const a = make();
        const b = () => make();
        const c = new Thing();
        const { d } = make();
        """
    )
    declarators = tree.declarations_in_file().variable_declarations

    results = [classify_factory_variable(node) for node in declarators]

    assert results[0] is not None
    assert results[0].kind is GeneralKind.FUNCTION
    assert results[0].local_name == "a"
    assert results[1:] == [None, None, None]


def test_type_alias_maps_to_type_parameter_kind() -> None:
    tree = _tree("type Id = string;\n")
    (alias,) = tree.declarations_in_file().type_aliases

    classification = classify(alias)

    assert classification is not None
    assert classification.kind is GeneralKind.TYPE_PARAMETER
    assert classification.hint is SymbolHint.TYPE_ALIAS
