"""
Command line entry point: ``sysml-parse``.

Parses a SysML-lite file (or stdin) and prints the tree, the tree as JSON,
or the raw token stream. A syntax error still prints the partial tree and
makes the command exit with status 1.
"""

import logging
from typing import List

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from .lexer import Lexer, Token
from .parser import ASTNode, ASTVisitor, NodeType, Parser, count_elements
from .serialization import to_json
from .utils.logger import configure_logging


_DISPLAY_NAMES = {
    NodeType.USECASE: "use case",
}


def node_label(node: ASTNode) -> Text:
    """Render one node as «type» name plus its other properties."""
    label = Text(f"«{_DISPLAY_NAMES.get(node.type, node.type.value)}» ", style="dim")
    label.append(node.name if node.name is not None else "Unnamed", style="bold")

    details = [f"{key}={value!r}" for key, value in node.properties.items() if key != "name"]
    if details:
        label.append("  " + " ".join(details), style="cyan")
    return label


class _TreeBuilder(ASTVisitor):
    """Mirror the AST into a rich Tree."""

    def __init__(self, tree: Tree):
        self._branches = [tree]

    def generic_visit(self, node: ASTNode):
        branch = self._branches[-1].add(node_label(node))
        self._branches.append(branch)
        super().generic_visit(node)
        self._branches.pop()


def build_tree(root: ASTNode, title: str = "model") -> Tree:
    """Build a rich Tree for the children of ``root``."""
    tree = Tree(Text(f"{title} ({count_elements(root)} elements)", style="bold"))
    builder = _TreeBuilder(tree)
    for child in root.children:
        builder.visit(child)
    return tree


def build_token_table(tokens: List[Token]) -> Table:
    """Build a rich Table listing tokens with their positions."""
    table = Table(title="Tokens")
    table.add_column("Line", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Type", style="cyan", no_wrap=True)
    table.add_column("Value")

    for token in tokens:
        table.add_row(str(token.line), str(token.column), token.type.name,
                      "" if token.value is None else repr(token.value))
    return table


@click.command()
@click.argument("source", type=click.File("r", encoding="utf-8-sig"), default="-")
@click.option("--format", "output_format", type=click.Choice(["tree", "json", "tokens"]),
              default="tree", show_default=True, help="What to print.")
@click.option("--indent", type=int, default=2, show_default=True,
              help="Indentation for JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Log debug messages.")
@click.option("-q", "--quiet", is_flag=True, help="Only log errors.")
@click.pass_context
def main(ctx: click.Context, source, output_format: str, indent: int, verbose: bool, quiet: bool):
    """Parse SOURCE (default: stdin) and print its model tree."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    configure_logging(level)

    filename = getattr(source, "name", "<stdin>")
    tokens = Lexer(source.read(), filename).tokenize()

    console = Console()

    if output_format == "tokens":
        console.print(build_token_table(tokens))
        return

    parser = Parser(tokens)
    root = parser.parse()

    if output_format == "json":
        click.echo(to_json(root, indent=indent))
    else:
        console.print(build_tree(root, title=filename))

    if parser.has_errors():
        ctx.exit(1)


if __name__ == "__main__":
    main()
