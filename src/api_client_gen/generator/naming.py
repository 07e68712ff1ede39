"""Identifier transforms for emitted code."""

RUST_KEYWORDS = frozenset({
    "as", "async", "await", "break", "const", "continue", "dyn", "else", "enum",
    "extern", "false", "fn", "for", "if", "impl", "in", "let", "loop", "match",
    "mod", "move", "mut", "pub", "ref", "return", "static", "struct", "trait",
    "true", "type", "unsafe", "use", "where", "while", "abstract", "become",
    "box", "do", "final", "macro", "override", "priv", "try", "typeof",
    "unsized", "virtual", "yield",
})

# Keywords that cannot be written as raw identifiers.
RESERVED_PATH_KEYWORDS = frozenset({"self", "super", "crate"})


def to_snake_case(name: str) -> str:
    """``UserTimeline`` -> ``user_timeline``.

    Lowercases the first character and puts an underscore before every later
    uppercase character. Already snake-cased names are returned unchanged.
    """
    if not name:
        return ""
    out = [name[0].lower()]
    for ch in name[1:]:
        if ch.isupper():
            out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)


def rust_ident(name: str) -> str:
    """Snake-cased identifier, written as a raw identifier when it is a keyword.

    ``self``, ``super`` and ``crate`` get a trailing underscore instead.
    """
    ident = to_snake_case(name)
    if ident in RESERVED_PATH_KEYWORDS:
        return f"{ident}_"
    if ident in RUST_KEYWORDS:
        return f"r#{ident}"
    return ident
