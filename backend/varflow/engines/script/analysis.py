"""
Static analysis of script source: find every top-level binding.

A top-level binding is a name stored in the module scope, wherever the
statement sits (inside if/for/while/try/with/match blocks too), but not
inside a function, lambda or class body. Comprehension loop variables live
in their own scope and are skipped; walrus targets inside a comprehension
bind in the enclosing scope and are kept.
"""

import ast


class _TopLevelBindingCollector(ast.NodeVisitor):
    def __init__(self) -> None:
        self.names: dict[str, None] = {}

    def _add(self, name: str | None) -> None:
        if name:
            self.names.setdefault(name, None)

    def visit_Name(self, node: ast.Name) -> None:
        if isinstance(node.ctx, ast.Store):
            self._add(node.id)

    # Nested scopes: only the parts evaluated in the enclosing scope are visited.

    def _visit_function(self, node: ast.FunctionDef | ast.AsyncFunctionDef) -> None:
        for deco in node.decorator_list:
            self.visit(deco)
        for default in (*node.args.defaults, *node.args.kw_defaults):
            if default is not None:
                self.visit(default)

    visit_FunctionDef = _visit_function
    visit_AsyncFunctionDef = _visit_function

    def visit_Lambda(self, node: ast.Lambda) -> None:
        for default in (*node.args.defaults, *node.args.kw_defaults):
            if default is not None:
                self.visit(default)

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        for deco in node.decorator_list:
            self.visit(deco)
        for base in node.bases:
            self.visit(base)
        for kw in node.keywords:
            self.visit(kw.value)

    def visit_comprehension(self, node: ast.comprehension) -> None:
        self.visit(node.iter)
        for cond in node.ifs:
            self.visit(cond)

    # match statement captures are plain strings, not Name nodes.

    def visit_MatchAs(self, node: ast.MatchAs) -> None:
        self._add(node.name)
        self.generic_visit(node)

    def visit_MatchStar(self, node: ast.MatchStar) -> None:
        self._add(node.name)

    def visit_MatchMapping(self, node: ast.MatchMapping) -> None:
        self.generic_visit(node)
        self._add(node.rest)


def find_top_level_bindings(source: str) -> list[str]:
    """
    Return the names bound at the top level of *source*, in order of first
    appearance, without duplicates. Raises SyntaxError for unparsable source.

    >>> find_top_level_bindings("a, b = 1, 2\\ndef f():\\n    c = 3\\n")
    ['a', 'b']
    """
    tree = ast.parse(source)
    collector = _TopLevelBindingCollector()
    collector.visit(tree)
    return list(collector.names)
