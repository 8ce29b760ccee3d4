import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Tuple

from measura.core.unit import Unit
from measura.errors import UnitParseError

if TYPE_CHECKING:
    from measura.units.registry import UnitsRegistry

logger = logging.getLogger(__name__)

# --- Plan: a flat sequence of (label, signed exponent) ---------------------
Plan = Tuple[Tuple[str, int], ...]

_OPERATORS = "*/^"
# ASCII digits only
_DIGITS = "0123456789"


# ---------------- Parser that builds a PLAN (no registry lookups!) ----------------
class _UnitExprParser:
    """
    Grammar of canonical unit symbols:
      expr   := ['1/' | '/'] term (('*' | '/') term)*
      term   := ATOM ['^' DIGITS]
      ATOM   := one or more characters other than '*', '/', '^' or whitespace
      DIGITS := [0-9]+

    A term after '/' (or after a leading '1/') gets a negative exponent; a term
    after '*' a positive one.

    With ``names=True`` the same grammar is read in the long form produced by
    unit names: operators may be padded with spaces ('kilogram * meter / second^2',
    '1 / second') and atoms may contain inner spaces.
    """
    def __init__(self, text: str, names: bool = False):
        self.s = text
        self.n = len(text)
        self.i = 0
        self.names = names

    def parse(self) -> Plan:
        if not self.names:
            for pos, ch in enumerate(self.s):
                if ch.isspace():
                    raise UnitParseError(f"Whitespace is not allowed in unit symbols (at {pos})", pos)

        sign = -1 if self._eat_reciprocal() else 1
        terms = [self._parse_term(sign)]
        while True:
            self._skip_ws()
            if self.i == self.n:
                break
            ch = self.s[self.i]
            if ch == '*':
                sign = 1
            elif ch == '/':
                sign = -1
            else:
                raise UnitParseError(
                    f"Unexpected trailing input at {self.i}: {self.s[self.i:self.i+10]!r}", self.i
                )
            self.i += 1
            terms.append(self._parse_term(sign))
        return tuple(terms)

    # term := ATOM ['^' DIGITS]
    def _parse_term(self, sign: int) -> Tuple[str, int]:
        atom = self._parse_atom()
        self._skip_ws()
        exp = 1
        if self._peek('^'):
            self.i += 1
            exp = self._parse_digits()
        return atom, sign * exp

    # ---- token helpers ----
    def _eat_reciprocal(self) -> bool:
        self._skip_ws()
        if self._peek('/'):
            self.i += 1
            return True
        if self._peek('1'):
            j = self.i + 1
            if self.names:
                while j < self.n and self.s[j].isspace():
                    j += 1
            if j < self.n and self.s[j] == '/':
                self.i = j + 1
                return True
        return False

    def _parse_atom(self) -> str:
        self._skip_ws()
        i0 = self.i
        while self.i < self.n and self.s[self.i] not in _OPERATORS:
            if not self.names and self.s[self.i].isspace():
                break
            self.i += 1
        atom = self.s[i0:self.i].strip()
        if not atom:
            ch = self.s[self.i:self.i+1]
            raise UnitParseError(f"Expected unit {'name' if self.names else 'symbol'} at {i0}, got {ch!r}", i0)
        return atom

    def _parse_digits(self) -> int:
        self._skip_ws()
        i0 = self.i
        while self.i < self.n and self.s[self.i] in _DIGITS:
            self.i += 1
        if i0 == self.i:
            raise UnitParseError(f"Expected integer exponent at {self.i}", self.i)
        return int(self.s[i0:self.i])

    def _skip_ws(self) -> None:
        if not self.names:
            return
        s, n, i = self.s, self.n, self.i
        while i < n and s[i].isspace():
            i += 1
        self.i = i

    def _peek(self, tok: str) -> bool:
        return self.i < self.n and self.s[self.i] == tok


# ---------------- Public API with caching-safe compilation ----------------
# Cache the *compiled plan* only. Safe across registries because there's no bound objects inside.
@lru_cache(maxsize=4096)
def _compile_unit_expr(expr: str, names: bool = False) -> Plan:
    if not isinstance(expr, str):
        raise TypeError(f"Unit expression must be str, got {type(expr).__name__}")
    if not expr.strip() if names else not expr:
        return ()
    plan = _UnitExprParser(expr, names=names).parse()
    logger.debug("compiled unit expression %r -> %r", expr, plan)
    return plan


def _eval_plan(plan: Plan, reg: "UnitsRegistry", names: bool = False) -> Unit:
    lookup = reg.get_by_name if names else reg.get_by_symbol
    # Unit() sums repeated components and drops zero exponents
    return Unit((lookup(label).defined, exp) for label, exp in plan)


def extract_unit_expr(expr: str, reg: "UnitsRegistry") -> Unit:
    """
    Parse a canonical unit symbol such as 'kg*m/s^2' or '1/s'.

    Caching-safety:
      * We cache a compiled syntax plan keyed by `expr` only (no registry state).
      * Evaluation binds symbols to units from the *provided* `reg` at call time.

    The empty string is the unitless unit. Malformed input raises
    `UnitParseError`; unknown symbols raise `UnitNotFoundError`.
    """
    return _eval_plan(_compile_unit_expr(expr), reg)


def extract_unit_name_expr(expr: str, reg: "UnitsRegistry") -> Unit:
    """Parse the long form produced by `Unit.name`, e.g. 'kilometer / hour'."""
    return _eval_plan(_compile_unit_expr(expr, names=True), reg, names=True)
