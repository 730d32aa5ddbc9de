import pathlib as pl
import re
import typing

INCLUDE_PATTERN: re.Pattern[str] = re.compile(pattern=r'^\s*#include\s+"([^"]+)"', flags=re.MULTILINE)

def resolve_includes(source: str, base_path: pl.Path, _active: frozenset[pl.Path] = frozenset()) -> str:
    """
    Recursively resolves #include "filename" directives in GLSL source code.
    Standard GLSL does not support #include, so this pre-processor manually inserts the code.
    A file that (directly or indirectly) includes itself is replaced by an error comment.
    """
    def replace(match: re.Match[str]) -> str:
        filename: str | typing.Any = match.group(1)
        included_path: pl.Path = (base_path / filename).resolve(strict=False)

        if not included_path.exists():
            print(f"Warning: Included file not found: {included_path}")
            return f"// ERROR: Include not found {filename}"

        if included_path in _active:
            print(f"Warning: Circular include skipped: {included_path}")
            return f"// ERROR: Circular include {filename}"

        included_content: str = included_path.read_text(encoding="utf-8")
        return resolve_includes(source=included_content, base_path=included_path.parent, _active=_active | {included_path})

    return INCLUDE_PATTERN.sub(replace, source)

def load_shader_source(shader_dir: pl.Path, filename: str) -> str:
    # Read a shader stage from disk with its includes expanded. A missing stage is fatal.
    shader_path: pl.Path = shader_dir / filename
    return resolve_includes(source=shader_path.read_text(encoding="utf-8"), base_path=shader_dir, _active=frozenset({shader_path.resolve(strict=False)}))
