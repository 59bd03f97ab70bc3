"""Minimal npm-style semantic version ranges.

Only the two questions the reconciler asks are exposed publicly:

    min_version(range)          lowest concrete version a range admits
    satisfies(version, range)   whether a concrete version is inside a range

Range syntax follows npm: ``||`` unions, whitespace-separated intersections,
``<``/``<=``/``>``/``>=``/``=`` comparators, hyphen ranges (``1.2 - 2``),
X-ranges (``*``, ``1.x``, ``1.2``), tilde (``~1.2.3``) and caret (``^1.2.3``).
Everything is desugared into plain comparators before evaluation, e.g.
``^1.2.3`` becomes ``>=1.2.3 <2.0.0-0``.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass, field

_IDENT = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"
_NUM = r"0|[1-9]\d*"

_VERSION_RE = re.compile(
    rf"^[v=]*({_NUM})\.({_NUM})\.({_NUM})(?:-({_IDENT}))?(?:\+({_IDENT}))?$"
)

_PARTIAL = (
    rf"v?(?P<major>{_NUM}|[xX*])"
    rf"(?:\.(?P<minor>{_NUM}|[xX*])"
    rf"(?:\.(?P<patch>{_NUM}|[xX*])"
    rf"(?:-(?P<pre>{_IDENT}))?"
    rf"(?:\+{_IDENT})?"
    r")?)?"
)
_PARTIAL_RE = re.compile(rf"^{_PARTIAL}$")
_TOKEN_RE = re.compile(rf"^(?P<op>~>?|\^|[<>]=?|=)?=?{_PARTIAL}$")
_HYPHEN_RE = re.compile(r"^(\S+)\s+-\s+(\S+)$")
# "> = 1.2", "~ 1.2", "^ 1.2" -> operator glued to its version
_OP_SPACE_RE = re.compile(r"(~>?|\^|[<>]=?|=)\s+")


class InvalidVersionError(ValueError):
    """Raised when a version or range expression cannot be parsed."""


def _ident(part: str) -> int | str:
    return int(part) if part.isdigit() else part


@functools.total_ordering
@dataclass(frozen=True)
class SemVer:
    """A concrete ``MAJOR.MINOR.PATCH[-prerelease][+build]`` version."""

    major: int
    minor: int
    patch: int
    prerelease: tuple[int | str, ...] = ()
    build: tuple[str, ...] = field(default=(), compare=False)

    @classmethod
    def parse(cls, text: str) -> SemVer:
        m = _VERSION_RE.match(text.strip())
        if not m:
            raise InvalidVersionError(f"Invalid version: {text!r}")
        major, minor, patch, pre, build = m.groups()
        return cls(
            major=int(major),
            minor=int(minor),
            patch=int(patch),
            prerelease=tuple(_ident(p) for p in pre.split(".")) if pre else (),
            build=tuple(build.split(".")) if build else (),
        )

    @property
    def core(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def _key(self) -> tuple:
        # A release sorts above any of its prereleases; numeric identifiers
        # sort below alphanumeric ones.
        if not self.prerelease:
            return (*self.core, 1, ())
        pre = tuple((0, p, "") if isinstance(p, int) else (1, 0, p) for p in self.prerelease)
        return (*self.core, 0, pre)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._key() < other._key()

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(str(p) for p in self.prerelease)
        return text


_ZERO = SemVer(0, 0, 0)
_ZERO_PRE = SemVer(0, 0, 0, (0,))


@dataclass(frozen=True)
class Comparator:
    """``operator`` applied to ``version``; ``version=None`` matches anything."""

    operator: str
    version: SemVer | None

    def test(self, version: SemVer) -> bool:
        if self.version is None:
            return True
        if self.operator == "<":
            return version < self.version
        if self.operator == "<=":
            return version <= self.version
        if self.operator == ">":
            return version > self.version
        if self.operator == ">=":
            return version >= self.version
        return version == self.version

    def __str__(self) -> str:
        return "*" if self.version is None else f"{self.operator}{self.version}"


ANY = Comparator("", None)

Range = list[list[Comparator]]


def _is_x(part: str | None) -> bool:
    return part is None or part in ("x", "X", "*")


def _v(major: int, minor: int, patch: int, pre: str | None = None) -> SemVer:
    prerelease = tuple(_ident(p) for p in pre.split(".")) if pre else ()
    return SemVer(major, minor, patch, prerelease)


def _upper(major: int, minor: int = 0, patch: int = 0) -> Comparator:
    """Exclusive upper bound that also shuts out prereleases of the bound."""
    return Comparator("<", SemVer(major, minor, patch, (0,)))


def _tilde(major: str, minor: str | None, patch: str | None, pre: str | None) -> list[Comparator]:
    if _is_x(major):
        return [ANY]
    M = int(major)
    if _is_x(minor):
        return [Comparator(">=", _v(M, 0, 0)), _upper(M + 1)]
    m = int(minor)  # type: ignore[arg-type]
    if _is_x(patch):
        return [Comparator(">=", _v(M, m, 0)), _upper(M, m + 1)]
    return [Comparator(">=", _v(M, m, int(patch), pre)), _upper(M, m + 1)]  # type: ignore[arg-type]


def _caret(major: str, minor: str | None, patch: str | None, pre: str | None) -> list[Comparator]:
    if _is_x(major):
        return [ANY]
    M = int(major)
    if _is_x(minor):
        return [Comparator(">=", _v(M, 0, 0)), _upper(M + 1)]
    m = int(minor)  # type: ignore[arg-type]
    if _is_x(patch):
        if M == 0:
            return [Comparator(">=", _v(0, m, 0)), _upper(0, m + 1)]
        return [Comparator(">=", _v(M, m, 0)), _upper(M + 1)]
    p = int(patch)  # type: ignore[arg-type]
    lower = Comparator(">=", _v(M, m, p, pre))
    if M != 0:
        return [lower, _upper(M + 1)]
    if m != 0:
        return [lower, _upper(0, m + 1)]
    return [lower, _upper(0, 0, p + 1)]


def _xrange(
    op: str, major: str, minor: str | None, patch: str | None, pre: str | None
) -> list[Comparator]:
    any_x = _is_x(major) or _is_x(minor) or _is_x(patch)
    if op == "=" and any_x:
        op = ""

    if _is_x(major):
        if op in ("<", ">"):
            # nothing can satisfy it
            return [Comparator("<", _ZERO_PRE)]
        return [ANY]

    M = int(major)
    if not any_x:
        return [Comparator(op or "=", _v(M, int(minor), int(patch), pre))]  # type: ignore[arg-type]

    x_minor = _is_x(minor)
    m = 0 if x_minor else int(minor)  # type: ignore[arg-type]
    if op:
        if op == ">":
            op = ">="
            if x_minor:
                M, m = M + 1, 0
            else:
                m += 1
        elif op == "<=":
            op = "<"
            if x_minor:
                M += 1
            else:
                m += 1
        if op == "<":
            return [_upper(M, m, 0)]
        return [Comparator(op, _v(M, m, 0))]

    if x_minor:
        return [Comparator(">=", _v(M, 0, 0)), _upper(M + 1)]
    return [Comparator(">=", _v(M, m, 0)), _upper(M, m + 1)]


def _parse_token(token: str) -> list[Comparator]:
    m = _TOKEN_RE.match(token)
    if not m:
        raise InvalidVersionError(f"Invalid comparator: {token!r}")
    op = m.group("op") or ""
    parts = m.group("major", "minor", "patch", "pre")
    if op.startswith("~"):
        return _tilde(*parts)
    if op == "^":
        return _caret(*parts)
    return _xrange(op, *parts)


def _parse_hyphen(low: str, high: str) -> list[Comparator]:
    lo = _PARTIAL_RE.match(low)
    hi = _PARTIAL_RE.match(high)
    if not lo or not hi:
        raise InvalidVersionError(f"Invalid hyphen range: {low} - {high}")

    comparators: list[Comparator] = []
    fM, fm, fp, fpre = lo.group("major", "minor", "patch", "pre")
    if not _is_x(fM):
        if _is_x(fm):
            comparators.append(Comparator(">=", _v(int(fM), 0, 0)))
        elif _is_x(fp):
            comparators.append(Comparator(">=", _v(int(fM), int(fm), 0)))
        else:
            comparators.append(Comparator(">=", _v(int(fM), int(fm), int(fp), fpre)))

    tM, tm, tp, tpre = hi.group("major", "minor", "patch", "pre")
    if not _is_x(tM):
        if _is_x(tm):
            comparators.append(_upper(int(tM) + 1))
        elif _is_x(tp):
            comparators.append(_upper(int(tM), int(tm) + 1))
        else:
            comparators.append(Comparator("<=", _v(int(tM), int(tm), int(tp), tpre)))

    return comparators or [ANY]


def _parse_set(text: str) -> list[Comparator]:
    text = text.strip()
    hyphen = _HYPHEN_RE.match(text)
    if hyphen:
        comparators = _parse_hyphen(hyphen.group(1), hyphen.group(2))
    else:
        text = _OP_SPACE_RE.sub(r"\1", text)
        comparators = [c for token in text.split() for c in _parse_token(token)]
    real = [c for c in comparators if c is not ANY]
    return real or [ANY]


def parse_range(text: str) -> Range:
    """Desugar a range expression into a union of comparator intersections."""
    return [_parse_set(part) for part in re.split(r"\s*\|\|\s*", text.strip())]


def _test_set(comparators: list[Comparator], version: SemVer) -> bool:
    if not all(c.test(version) for c in comparators):
        return False
    if not version.prerelease:
        return True
    # A prerelease only matches when some comparator opts into prereleases
    # of the very same major.minor.patch.
    return any(
        c.version is not None and c.version.prerelease and c.version.core == version.core
        for c in comparators
    )


def _test_range(rng: Range, version: SemVer) -> bool:
    return any(_test_set(comparators, version) for comparators in rng)


def min_version(range_text: str) -> SemVer | None:
    """Lowest version admitted by ``range_text``; ``None`` if invalid or empty."""
    try:
        rng = parse_range(range_text)
    except InvalidVersionError:
        return None

    for candidate in (_ZERO, _ZERO_PRE):
        if _test_range(rng, candidate):
            return candidate

    lowest: SemVer | None = None
    for comparators in rng:
        set_min: SemVer | None = None
        for c in comparators:
            if c.version is None or c.operator in ("<", "<="):
                continue
            bound = c.version
            if c.operator == ">":
                if bound.prerelease:
                    bound = SemVer(*bound.core, (*bound.prerelease, 0))
                else:
                    bound = SemVer(bound.major, bound.minor, bound.patch + 1)
            if set_min is None or bound > set_min:
                set_min = bound
        if set_min is not None and (lowest is None or set_min < lowest):
            lowest = set_min

    if lowest is not None and _test_range(rng, lowest):
        return lowest
    return None


def satisfies(version: str, range_text: str) -> bool:
    """Whether concrete ``version`` falls inside ``range_text``; invalid input is False."""
    try:
        parsed = SemVer.parse(version)
        rng = parse_range(range_text)
    except InvalidVersionError:
        return False
    return _test_range(rng, parsed)
