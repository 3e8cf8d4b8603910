"""Index manifest that re-exports every generated type-definition file."""

import os
import re
from pathlib import Path
from typing import Iterable

from .program import IndexManifest, TSExportAll

# Modules that ship with the runtime and are always re-exported last
RUNTIME_MODULES = ("./runtime", "./stores")

# One level of dual extension: Hello.d.ts -> Hello
_TYPE_DEFINITION_SUFFIX = re.compile(r"\.[^/.]+\.[^/.]+$")


def module_specifier(from_dir: str | Path, target: str | Path) -> str:
    """Return the relative import path from from_dir to a type-definition file.

    The path always starts with "./" and has its type-definition suffix
    stripped, e.g. "./artifacts/Hello" for "<from_dir>/artifacts/Hello.d.ts".
    """
    relative = os.path.relpath(os.path.abspath(target), os.path.abspath(from_dir))
    relative = relative.replace(os.sep, "/")
    return "./" + _TYPE_DEFINITION_SUFFIX.sub("", relative)


def compose_index(paths: Iterable[str | Path], index_path: str | Path) -> IndexManifest:
    """Build the manifest re-exporting paths, in the given order.

    The runtime modules always come after every document entry.
    """
    index_dir = Path(os.path.abspath(index_path)).parent
    exports = [TSExportAll(module_specifier(index_dir, path)) for path in paths]
    exports.extend(TSExportAll(source) for source in RUNTIME_MODULES)
    return IndexManifest(exports=exports)
