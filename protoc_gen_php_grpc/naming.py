"""PHP identifier and namespace rules.

Mirrors the naming the PHP protobuf generator applies to message classes so
that generated interfaces reference the classes protoc actually emits.
"""

import re

from .descriptors import FileDescriptor

NAMESPACE_SEPARATOR = "\\"
GOOGLE_PROTOBUF_PACKAGE = "google.protobuf"

# Words PHP refuses as class names; compared case-insensitively.
RESERVED_WORDS = frozenset(
    """
    abstract and array as break callable case catch class clone const continue
    declare default die do echo else elseif empty enddeclare endfor endforeach
    endif endswitch endwhile eval exit extends final finally fn for foreach
    function global goto if implements include include_once instanceof
    insteadof interface isset list match namespace new or print private
    protected public readonly require require_once return static switch throw
    trait try unset use var while xor yield int float bool string true false
    null void iterable object mixed never self parent
    """.split()
)

_WORD_BOUNDARY = re.compile(r"[_\-.]+")


def camelize(word: str) -> str:
    """Upper-case the first letter of every ``_``/``-``/``.`` separated part.

    ``dino_party`` becomes ``DinoParty``; the rest of each part is kept.
    """
    return "".join(part[:1].upper() + part[1:] for part in _WORD_BOUNDARY.split(word) if part)


def identifier(name: str, suffix: str = "") -> str:
    """Build a PHP identifier, e.g. ``identifier("Service", "interface")``."""
    if suffix:
        return camelize(name) + camelize(suffix)
    return camelize(name)


def is_reserved(name: str) -> bool:
    return name.lower() in RESERVED_WORDS


def resolve_reserved(name: str, package: str) -> str:
    """Prefix reserved class names: ``GPB`` for well-known types, ``PB`` otherwise."""
    if not is_reserved(name):
        return name
    if package == GOOGLE_PROTOBUF_PACKAGE:
        return "GPB" + name
    return "PB" + name


def namespace_from_package(package: str) -> str:
    """``import.sub`` becomes ``Import\\Sub``."""
    return NAMESPACE_SEPARATOR.join(identifier(p) for p in package.split(".") if p)


def php_namespace(file: FileDescriptor) -> str:
    """PHP namespace of ``file``: its ``php_namespace`` option, else its package."""
    if file.php_namespace is not None:
        return file.php_namespace.strip(NAMESPACE_SEPARATOR)
    return namespace_from_package(file.package)


def class_name(segments: tuple[str, ...], package: str) -> str:
    """Relative PHP class name for a (possibly nested) type."""
    return NAMESPACE_SEPARATOR.join(resolve_reserved(identifier(s), package) for s in segments)
