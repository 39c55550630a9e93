"""Diagnostics for maps and monoid descriptors.

``check_map`` verifies the encoding invariants of a single map:

    identity_stored    no stored value is the identity
    key_order          keys are strictly ascending
    size_consistent    cached subtree sizes are correct
    balanced           the weight-balance condition holds at every node

``check_monoid`` tests a descriptor's declared laws against sample values.
A law that fails on the samples is an ERROR; too few samples to say much is
a WARNING.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from . import tree
from .errors import InvariantError
from .monoid import Capability, Monoid

if TYPE_CHECKING:
    from .core import MonoidMap

logger = logging.getLogger(__name__)


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    check: str
    severity: Severity
    message: str
    subject: str | None = None


@dataclass(frozen=True)
class CheckResult:
    name: str
    diagnostics: tuple[Diagnostic, ...]

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.severity == Severity.ERROR)

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.severity == Severity.WARNING)

    @property
    def is_lawful(self) -> bool:
        return len(self.errors) == 0


@dataclass
class CheckContext:
    name: str
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def error(self, check: str, message: str, subject: Any = None) -> None:
        self.diagnostics.append(
            Diagnostic(check, Severity.ERROR, message, _describe(subject))
        )

    def warning(self, check: str, message: str, subject: Any = None) -> None:
        self.diagnostics.append(
            Diagnostic(check, Severity.WARNING, message, _describe(subject))
        )

    def result(self) -> CheckResult:
        return CheckResult(self.name, tuple(self.diagnostics))


def _describe(subject: Any) -> str | None:
    return None if subject is None else repr(subject)


# ---------------------------------------------------------------------------
# Maps
# ---------------------------------------------------------------------------


def check_map(m: MonoidMap[Any, Any]) -> CheckResult:
    ctx = CheckContext(f"MonoidMap[{m.monoid.name}]")
    is_identity = m.monoid.is_identity

    for n in tree.nodes(m.root):
        if is_identity(n.value):
            ctx.error(
                "identity_stored",
                f"Key {n.key!r} stores the identity value {n.value!r}",
                n.key,
            )
        expected = tree.size(n.left) + tree.size(n.right) + 1
        if n.size != expected:
            ctx.error(
                "size_consistent",
                f"Node at key {n.key!r} records size {n.size}, actual {expected}",
                n.key,
            )
        sl, sr = tree.size(n.left), tree.size(n.right)
        if sl + sr > 1 and (sl > tree.DELTA * sr or sr > tree.DELTA * sl):
            ctx.error(
                "balanced",
                f"Node at key {n.key!r} is unbalanced ({sl} left, {sr} right)",
                n.key,
            )

    previous: Any = tree.MISSING
    for k, _ in tree.items(m.root):
        if previous is not tree.MISSING and not previous < k:
            ctx.error(
                "key_order",
                f"Key {k!r} does not follow {previous!r} in ascending order",
                k,
            )
        previous = k

    return ctx.result()


def validate(m: MonoidMap[Any, Any]) -> None:
    """Raise InvariantError if ``m`` breaks any encoding invariant."""
    result = check_map(m)
    if not result.is_lawful:
        for d in result.errors:
            logger.debug("%s: [%s] %s", result.name, d.check, d.message)
        raise InvariantError(
            "; ".join(f"[{d.check}] {d.message}" for d in result.errors)
        )


# ---------------------------------------------------------------------------
# Monoid descriptors
# ---------------------------------------------------------------------------


def check_monoid(monoid: Monoid[Any], samples: Sequence[Any]) -> CheckResult:
    """Test the laws ``monoid`` declares against every pair/triple of samples."""
    ctx = CheckContext(monoid.name)
    m = monoid
    combine = m.combine
    identity = m.identity
    values = [identity, *samples]

    if len(samples) < 2:
        ctx.warning(
            "few_samples", f"Only {len(samples)} sample(s); most laws go untested"
        )

    for a in values:
        if m.is_identity(a) != (a == identity):
            ctx.error(
                "is_identity_agrees",
                f"is_identity({a!r}) disagrees with equality to {identity!r}",
                a,
            )
        if combine(identity, a) != a or combine(a, identity) != a:
            ctx.error("identity_law", f"{identity!r} is not neutral for {a!r}", a)
        if m.idempotent and combine(a, a) != a:
            ctx.error("idempotence", f"combine({a!r}, {a!r}) != {a!r}", a)
        if m.invert is not None and not m.is_identity(combine(a, m.invert(a))):
            ctx.error("inverse_law", "combine(a, invert(a)) is not identity", a)
        if m.leq is not None and not m.leq(identity, a):
            ctx.error("leq_identity", f"leq(identity, {a!r}) does not hold", a)

    for a, b in itertools.product(values, repeat=2):
        ab = combine(a, b)
        if m.commutative and ab != combine(b, a):
            ctx.error("commutativity", f"{a!r} and {b!r} do not commute", (a, b))
        if m.has(Capability.LEFT_REDUCTIVE):
            _check_strip(ctx, "strip_prefix_law", m.strip_prefix, a, b, ab,
                         lambda x, r: combine(x, r))
        if m.has(Capability.RIGHT_REDUCTIVE):
            _check_strip(ctx, "strip_suffix_law", m.strip_suffix, b, a, ab,
                         lambda x, r: combine(r, x))
        if m.monus is not None:
            if combine(a, m.monus(b, a)) != combine(b, m.monus(a, b)):
                ctx.error(
                    "monus_law",
                    "combine(a, monus(b, a)) != combine(b, monus(a, b))",
                    (a, b),
                )
        if m.leq is not None and not m.leq(a, ab):
            ctx.error("leq_combine", f"leq({a!r}, combine(a, b)) does not hold", (a, b))

    for a, b, c in itertools.product(values, repeat=3):
        if combine(a, combine(b, c)) != combine(combine(a, b), c):
            ctx.error("associativity", "combine is not associative", (a, b, c))

    return ctx.result()


def _check_strip(
    ctx: CheckContext, check: str, strip: Any, x: Any, other: Any, whole: Any, rebuild: Any
) -> None:
    # x must strip off of whole, and any residual must rebuild the original.
    residual = strip(x, whole)
    if residual is None or rebuild(x, residual) != whole:
        ctx.error(check, f"cannot strip {x!r} from {whole!r}", (x, whole))
    residual = strip(x, other)
    if residual is not None and rebuild(x, residual) != other:
        ctx.error(check, f"residual {residual!r} does not rebuild {other!r}", (x, other))
