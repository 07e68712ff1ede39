"""Structural checks on generated client files."""

import re

_PAIRS = {")": "(", "]": "[", "}": "{"}
_ITEM_RE = re.compile(r"^pub struct (\w+)", re.MULTILINE)


def _strip_strings_and_comments(source: str) -> str:
    """Blank out string literals and line comments so their contents are not counted."""
    out = []
    i = 0
    in_string = False
    while i < len(source):
        ch = source[i]
        if in_string:
            if ch == "\\":
                i += 2
                continue
            if ch == '"':
                in_string = False
            elif ch == "\n":
                out.append(ch)
            i += 1
            continue
        if ch == '"':
            in_string = True
        elif source.startswith("//", i):
            end = source.find("\n", i)
            i = len(source) if end == -1 else end
            continue
        else:
            out.append(ch)
        i += 1
    return "".join(out)


def validate_delimiters(files: dict[str, str]) -> dict[str, str]:
    """Check that (), [] and {} are balanced.

    Returns dict of {filename: error_message} for files with errors.
    """
    errors = {}
    for filename, content in files.items():
        stack: list[tuple[str, int]] = []
        code = _strip_strings_and_comments(content)
        for lineno, line in enumerate(code.splitlines(), start=1):
            for ch in line:
                if ch in "([{":
                    stack.append((ch, lineno))
                elif ch in _PAIRS:
                    if not stack or stack[-1][0] != _PAIRS[ch]:
                        errors[filename] = f"Unbalanced '{ch}' (line {lineno})"
                        break
                    stack.pop()
            if filename in errors:
                break
        if filename not in errors and stack:
            ch, lineno = stack[-1]
            errors[filename] = f"Unclosed '{ch}' (line {lineno})"
    return errors


def validate_unique_items(files: dict[str, str]) -> dict[str, str]:
    """Check that no struct is declared twice."""
    errors = {}
    for filename, content in files.items():
        seen = set()
        for name in _ITEM_RE.findall(content):
            if name in seen:
                errors[filename] = f"Duplicate struct {name}"
                break
            seen.add(name)
    return errors


def validate_files(files: dict[str, str]) -> dict[str, str]:
    """Run all validations on generated files.

    Returns dict of {filename: error_message} for all files with errors.
    """
    errors = {}
    errors.update(validate_delimiters(files))
    errors.update(validate_unique_items(files))
    return errors
