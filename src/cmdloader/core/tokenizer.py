"""Schemaless argument tokenizer.

Turns a raw argument list into flags and positionals without requiring
every option to be declared up front, which is what the loader needs:
the top-level pass runs before anyone knows which command will handle
the arguments.

Rules
-----
* ``--key=value``, ``--key value``, ``--key`` (``True``), ``--no-key``
  (``False``).
* ``-abc`` sets ``a``, ``b`` and ``c``; the last letter of a group may
  take the next token as its value; ``-n5`` sets ``n`` to ``5``.
* ``--`` ends flag parsing.  A lone ``-`` and negative numbers are
  positionals.
* Flag values that look numeric become ``int``/``float`` unless the
  option is declared ``string``.  Positionals always stay ``str``.
* A repeated flag accumulates into a list.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from cmdloader.core.models import OptionSpec, ParsedArguments
from cmdloader.exceptions import OptionSpecError

_NUMBER_RE = re.compile(r"^[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?$")
_INT_RE = re.compile(r"^[-+]?\d+$")
_SPEC_KEYS: frozenset[str] = frozenset({"alias", "boolean", "string", "default"})


# ---------------------------------------------------------------------------
# Option spec normalization
# ---------------------------------------------------------------------------

def normalize_spec(
    spec: Mapping[str, OptionSpec | Mapping[str, Any]] | None,
) -> dict[str, OptionSpec]:
    """Convert a user-supplied option spec into :class:`OptionSpec` values.

    Raises
    ------
    OptionSpecError
        If an entry is neither an ``OptionSpec`` nor a mapping, or uses
        unknown keys.
    """
    if not spec:
        return {}
    if not isinstance(spec, Mapping):
        raise OptionSpecError(
            f"Option spec must be a mapping, got {type(spec).__name__}.",
        )

    normalized: dict[str, OptionSpec] = {}
    for key, entry in spec.items():
        if isinstance(entry, OptionSpec):
            normalized[key] = entry
            continue
        if not isinstance(entry, Mapping):
            raise OptionSpecError(
                f"Option {key!r} must be an OptionSpec or a mapping.",
            )
        unknown = set(entry) - _SPEC_KEYS
        if unknown:
            raise OptionSpecError(
                f"Option {key!r} has unknown settings: {', '.join(sorted(unknown))}",
                hint=f"Supported settings: {', '.join(sorted(_SPEC_KEYS))}",
            )
        alias = entry.get("alias", ())
        if isinstance(alias, str):
            alias = (alias,)
        normalized[key] = OptionSpec(
            alias=tuple(alias),
            boolean=bool(entry.get("boolean", False)),
            string=bool(entry.get("string", False)),
            default=entry.get("default"),
        )
    return normalized


def _alias_groups(options: Mapping[str, OptionSpec]) -> dict[str, tuple[str, ...]]:
    """Map every option name to the full set of names sharing its value."""
    groups: dict[str, set[str]] = {}
    for key, option in options.items():
        merged = {key, *option.alias}
        for name in list(merged):
            merged |= groups.get(name, set())
        for name in merged:
            groups[name] = merged
    return {name: tuple(sorted(group)) for name, group in groups.items()}


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

class _FlagSink:
    """Accumulates flag values, keeping aliases in step."""

    def __init__(
        self,
        aliases: Mapping[str, tuple[str, ...]],
        booleans: frozenset[str],
        strings: frozenset[str],
    ) -> None:
        self.aliases = aliases
        self.booleans = booleans
        self.strings = strings
        self.values: dict[str, Any] = {name: False for name in booleans}
        self.seen: set[str] = set()

    def coerce(self, key: str, raw: str) -> Any:
        if key in self.strings or not _NUMBER_RE.match(raw):
            return raw
        if _INT_RE.match(raw):
            return int(raw)
        return float(raw)

    def set(self, key: str, value: Any) -> None:
        for name in self.aliases.get(key, (key,)):
            self._set_one(name, value)

    def _set_one(self, name: str, value: Any) -> None:
        if name not in self.seen or name in self.booleans:
            self.values[name] = value
            self.seen.add(name)
            return
        current = self.values[name]
        if isinstance(current, list):
            current.append(value)
        else:
            self.values[name] = [current, value]

    def flag_with_next(self, key: str, following: str | None) -> bool:
        """Set *key* from the following token if it can take it.

        Returns ``True`` when *following* was consumed.
        """
        if (
            following is not None
            and not following.startswith("-")
            and key not in self.booleans
        ):
            self.set(key, self.coerce(key, following))
            return True
        if following in ("true", "false"):
            self.set(key, following == "true")
            return True
        self.set(key, "" if key in self.strings else True)
        return False


def tokenize(
    args: Sequence[str],
    spec: Mapping[str, OptionSpec | Mapping[str, Any]] | None = None,
) -> ParsedArguments:
    """Split *args* into flags and positionals.

    Parameters
    ----------
    args:
        Raw argument list (no program name).
    spec:
        Optional per-option declarations keyed by option name.

    Raises
    ------
    OptionSpecError
        If *spec* is malformed.
    """
    options = normalize_spec(spec)
    aliases = _alias_groups(options)

    def _names(predicate: str) -> frozenset[str]:
        return frozenset(
            name
            for key, option in options.items()
            if getattr(option, predicate)
            for name in aliases[key]
        )

    sink = _FlagSink(aliases, _names("boolean"), _names("string"))
    tokens = [str(arg) for arg in args]
    positionals: list[str] = []

    i = 0
    while i < len(tokens):
        arg = tokens[i]
        following = tokens[i + 1] if i + 1 < len(tokens) else None

        if arg == "--":
            positionals.extend(tokens[i + 1:])
            break

        if arg.startswith("--") and "=" in arg[2:]:
            key, _, value = arg[2:].partition("=")
            if key in sink.booleans:
                sink.set(key, value != "false")
            else:
                sink.set(key, sink.coerce(key, value))
        elif arg.startswith("--no-") and len(arg) > 5:
            sink.set(arg[5:], False)
        elif arg.startswith("--") and len(arg) > 2:
            if sink.flag_with_next(arg[2:], following):
                i += 1
        elif arg.startswith("-") and len(arg) > 1 and not _NUMBER_RE.match(arg):
            if _short_group(sink, arg[1:], following):
                i += 1
        else:
            positionals.append(arg)
        i += 1

    for key, option in options.items():
        if option.default is None:
            continue
        for name in aliases[key]:
            if name not in sink.seen:
                sink.values[name] = option.default

    return ParsedArguments(flags=sink.values, positionals=tuple(positionals))


def _short_group(sink: _FlagSink, letters: str, following: str | None) -> bool:
    """Handle ``-abc`` style groups.  Returns ``True`` if *following* was used."""
    for index, letter in enumerate(letters[:-1]):
        rest = letters[index + 1:]
        if rest.startswith("="):
            sink.set(letter, sink.coerce(letter, rest[1:]))
            return False
        if letter.isalpha() and _NUMBER_RE.match(rest):
            sink.set(letter, sink.coerce(letter, rest))
            return False
        sink.set(letter, "" if letter in sink.strings else True)
    return sink.flag_with_next(letters[-1], following)
