"""Fact extraction from Python resource classes using AST analysis."""

import ast
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .logger import get_logger
from .models import DeclaredParameter, HttpVerb, MethodFact
from .path_template import join_paths

SELF_MARKER = "self_link"
RELATIONAL_MARKER = "sub_resource"
PATH_MARKER = "path"
PATH_PARAM = "PathParam"
QUERY_PARAM = "QueryParam"


def _callee_name(node: ast.AST) -> Optional[str]:
    """Name of a decorator or call target, ignoring module qualifiers."""
    if isinstance(node, ast.Call):
        node = node.func
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    return None


def _first_string(call: ast.AST, keyword: str) -> Optional[str]:
    if not isinstance(call, ast.Call):
        return None
    values = list(call.args[:1]) + [k.value for k in call.keywords if k.arg == keyword]
    for value in values:
        if isinstance(value, ast.Constant) and isinstance(value.value, str):
            return value.value
    return None


class ResourceExtractor:
    """
    Extracts method facts from Python source without importing it.

    A fact is produced for every function or class carrying a
    ``@self_link`` or ``@sub_resource`` marker. Paths come from ``@path``
    on the class and on the method, verbs from ``@GET``, ``@POST``... and
    parameters from ``PathParam``/``QueryParam`` argument defaults.
    """

    def __init__(self):
        self.logger = get_logger()

    def extract_source(self, code: str, module: str = "", filename: str = "<string>") -> List[MethodFact]:
        """
        Extract facts from one module's source code.

        Args:
            code: Python source code
            module: Dotted module name used to qualify class names
            filename: Reported in fact sources

        Raises:
            SyntaxError: If the code cannot be parsed
        """
        tree = ast.parse(code, filename=filename)
        imports = self._collect_imports(tree)
        local_classes = self._collect_classes(tree, module)
        facts: List[MethodFact] = []
        extractor = self

        class Visitor(ast.NodeVisitor):
            def __init__(self) -> None:
                self.context: List[Tuple[str, Optional[str]]] = []

            def visit_ClassDef(self, node: ast.ClassDef) -> None:
                qualified = ".".join(filter(None, [module] + [c for c, _ in self.context] + [node.name]))
                if extractor._markers(node.decorator_list):
                    facts.append(MethodFact(
                        owner_class=module,
                        method_name=node.name,
                        element_kind="class",
                        source=f"{filename}:{node.lineno}",
                    ))
                class_path = extractor._path_of(node.decorator_list)
                self.context.append((node.name, class_path))
                for item in node.body:
                    if isinstance(item, (ast.FunctionDef, ast.AsyncFunctionDef)):
                        fact = extractor._method_fact(item, qualified, class_path,
                                                      imports, local_classes, filename)
                        if fact is not None:
                            facts.append(fact)
                    elif isinstance(item, ast.ClassDef):
                        self.visit(item)
                self.context.pop()

            def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
                # Reached only for functions outside a class body.
                if extractor._markers(node.decorator_list):
                    facts.append(MethodFact(
                        owner_class=module,
                        method_name=node.name,
                        element_kind="function",
                        source=f"{filename}:{node.lineno}",
                    ))

            def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:
                self.visit_FunctionDef(node)

        Visitor().visit(tree)
        return facts

    def extract_file(self, path, root=None) -> List[MethodFact]:
        """Extract facts from a file; the module name is its path relative to ``root``."""
        path = Path(path)
        module = self.module_name(path, Path(root) if root is not None else path.parent)
        return self.extract_source(path.read_text(encoding="utf-8"), module, str(path))

    def extract_tree(self, directory) -> List[MethodFact]:
        """Extract facts from every ``.py`` file under a directory, in sorted order."""
        directory = Path(directory)
        facts = []
        for path in sorted(directory.rglob("*.py")):
            try:
                facts.extend(self.extract_file(path, directory))
            except SyntaxError as e:
                self.logger.error(f"Skipping {path}: {e}")
        self.logger.info(f"Extracted {len(facts)} facts from {directory}")
        return facts

    @staticmethod
    def module_name(path: Path, root: Path) -> str:
        relative = path.relative_to(root).with_suffix("")
        parts = list(relative.parts)
        if parts and parts[-1] == "__init__":
            parts.pop()
        return ".".join(parts)

    def _markers(self, decorators: List[ast.expr]) -> List[str]:
        return [n for n in map(_callee_name, decorators) if n in (SELF_MARKER, RELATIONAL_MARKER)]

    def _path_of(self, decorators: List[ast.expr]) -> Optional[str]:
        for decorator in decorators:
            if _callee_name(decorator) == PATH_MARKER:
                return _first_string(decorator, "value")
        return None

    def _verb_of(self, decorators: List[ast.expr]) -> Optional[str]:
        for decorator in decorators:
            verb = HttpVerb.parse(_callee_name(decorator))
            if verb is not None:
                return verb.value
        return None

    def _method_fact(self, node, owner: str, class_path: Optional[str],
                     imports: Dict[str, str], local_classes: Dict[str, str],
                     filename: str) -> Optional[MethodFact]:
        markers = self._markers(node.decorator_list)
        if not markers:
            return None

        target = None
        for decorator in node.decorator_list:
            if _callee_name(decorator) == RELATIONAL_MARKER and isinstance(decorator, ast.Call):
                target = self._resolve_target(decorator, imports, local_classes)

        method_path = self._path_of(node.decorator_list)
        return MethodFact(
            owner_class=owner,
            method_name=node.name,
            http_verb=self._verb_of(node.decorator_list),
            raw_path=join_paths(class_path, method_path),
            self_marker=SELF_MARKER in markers,
            relational_marker=RELATIONAL_MARKER in markers,
            relational_target=target,
            declared_parameters=self._parameters(node.args),
            source=f"{filename}:{node.lineno}",
        )

    def _resolve_target(self, call: ast.Call, imports: Dict[str, str],
                        local_classes: Dict[str, str]) -> Optional[str]:
        values = list(call.args[:1]) + [k.value for k in call.keywords if k.arg == "target"]
        if not values:
            return None
        value = values[0]
        if isinstance(value, ast.Constant) and isinstance(value.value, str):
            return value.value
        if isinstance(value, ast.Name):
            return imports.get(value.id) or local_classes.get(value.id) or value.id
        if isinstance(value, ast.Attribute):
            dotted = ast.unparse(value)
            head, _, rest = dotted.partition(".")
            return f"{imports[head]}.{rest}" if head in imports else dotted
        return None

    def _parameters(self, args: ast.arguments) -> List[DeclaredParameter]:
        positional = args.posonlyargs + args.args
        defaults: List[Tuple[ast.arg, Optional[ast.expr]]] = []
        padding = len(positional) - len(args.defaults)
        for index, arg in enumerate(positional):
            defaults.append((arg, args.defaults[index - padding] if index >= padding else None))
        defaults.extend(zip(args.kwonlyargs, args.kw_defaults))

        declared = []
        for arg, default in defaults:
            kind = _callee_name(default) if isinstance(default, ast.Call) else None
            if kind not in (PATH_PARAM, QUERY_PARAM):
                continue
            name = _first_string(default, "name") or arg.arg
            declared_type = ast.unparse(arg.annotation) if arg.annotation is not None else "str"
            pattern = None
            if kind == PATH_PARAM:
                pattern_nodes = list(default.args[1:2]) + [k.value for k in default.keywords if k.arg == "pattern"]
                for node in pattern_nodes:
                    if isinstance(node, ast.Constant) and isinstance(node.value, str):
                        pattern = node.value
            declared.append(DeclaredParameter(declared_type, name, kind == PATH_PARAM, pattern))
        return declared

    @staticmethod
    def _collect_imports(tree: ast.Module) -> Dict[str, str]:
        imports = {}
        for node in tree.body:
            if isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
                for alias in node.names:
                    imports[alias.asname or alias.name] = f"{node.module}.{alias.name}"
            elif isinstance(node, ast.Import):
                for alias in node.names:
                    if alias.asname:
                        imports[alias.asname] = alias.name
        return imports

    @staticmethod
    def _collect_classes(tree: ast.Module, module: str) -> Dict[str, str]:
        return {
            node.name: f"{module}.{node.name}" if module else node.name
            for node in tree.body
            if isinstance(node, ast.ClassDef)
        }
