from .writer import TypeStubWriter
from .driver import StubResult, generate_stub, iter_source_files, stub_file, stub_path_for, stub_tree
from .preferences import DEFAULT_HEADER, FormattingPreferences, StubOptions
from .naming import ConventionNameClassifier, NameClassifier, is_private_name, is_protected_name
from .expressions import CSTExpressionRenderer, ExpressionRenderer

__all__ = [
    # engine
    "TypeStubWriter",
    # driver
    "StubResult", "generate_stub", "iter_source_files", "stub_file", "stub_path_for", "stub_tree",
    # configuration
    "DEFAULT_HEADER", "FormattingPreferences", "StubOptions",
    # collaborators
    "ConventionNameClassifier", "NameClassifier", "is_private_name", "is_protected_name",
    "CSTExpressionRenderer", "ExpressionRenderer",
]
