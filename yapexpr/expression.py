"""Expression trees built from ordinary Python operators.

Expressions are immutable trees.  Each node has a ``kind`` (an
:class:`ExprKind`) and a tuple of ``elements``.  A terminal holds an
arbitrary value.  Every other node holds its operands, and those operands are
expressions themselves.

Python already shares objects by reference, so an operand expression is
stored as-is, with no copy.  :func:`make_ref` builds an explicit reference
node for the cases where one is wanted.

Anything with a ``kind`` attribute holding an :class:`ExprKind` and an
``elements`` attribute holding a tuple is treated as an expression.  A
*template* is any callable ``template(kind, *elements)`` that returns such an
object.  :class:`Expression` and its subclasses are templates.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable

Template = Callable[..., Any]


class ExprArity(Enum):
    """Number of operands an expression kind takes."""

    invalid = auto()
    one = auto()
    two = auto()
    three = auto()
    n = auto()


class ExprKind(Enum):
    """The kind of an expression node."""

    expr_ref = auto()
    terminal = auto()

    unary_plus = auto()
    negate = auto()
    dereference = auto()
    complement = auto()
    address_of = auto()
    logical_not = auto()
    pre_inc = auto()
    pre_dec = auto()
    post_inc = auto()
    post_dec = auto()

    shift_left = auto()
    shift_right = auto()
    multiplies = auto()
    divides = auto()
    modulus = auto()
    plus = auto()
    minus = auto()
    less = auto()
    greater = auto()
    less_equal = auto()
    greater_equal = auto()
    equal_to = auto()
    not_equal_to = auto()
    logical_or = auto()
    logical_and = auto()
    bitwise_and = auto()
    bitwise_or = auto()
    bitwise_xor = auto()
    comma = auto()
    mem_ptr = auto()
    assign = auto()
    shift_left_assign = auto()
    shift_right_assign = auto()
    multiplies_assign = auto()
    divides_assign = auto()
    modulus_assign = auto()
    plus_assign = auto()
    minus_assign = auto()
    bitwise_and_assign = auto()
    bitwise_or_assign = auto()
    bitwise_xor_assign = auto()
    subscript = auto()

    if_else = auto()

    call = auto()

    def arity(self) -> ExprArity:
        """Return how many operands an expression of this kind holds."""
        order = list(type(self))
        position = order.index(self)
        if position <= order.index(ExprKind.post_dec):
            return ExprArity.one
        if position <= order.index(ExprKind.subscript):
            return ExprArity.two
        if self is ExprKind.if_else:
            return ExprArity.three
        if self is ExprKind.call:
            return ExprArity.n
        return ExprArity.invalid


_FIXED_COUNTS = {ExprArity.one: 1, ExprArity.two: 2, ExprArity.three: 3}


def _check_count(kind: ExprKind, count: int) -> None:
    arity = kind.arity()
    if arity is ExprArity.n:
        if count < 1:
            raise ValueError(f"a {kind.name} expression needs at least one element")
        return
    expected = _FIXED_COUNTS.get(arity)
    if expected is None:
        raise ValueError(f"{kind.name} is not a valid expression kind")
    if count != expected:
        raise ValueError(
            f"a {kind.name} expression takes {expected} element(s), got {count}"
        )


@dataclass(frozen=True)
class Placeholder:
    """A numbered slot that is filled in when an expression is evaluated."""

    index: int

    def __post_init__(self) -> None:
        if isinstance(self.index, bool) or not isinstance(self.index, int):
            raise TypeError("placeholder index must be an int")
        if self.index < 1:
            raise ValueError("placeholder indices start at 1")


class Expression:
    """An expression node whose operators build larger expressions."""

    __slots__ = ("kind", "elements")

    def __init__(self, kind, *args):
        kind = ExprKind(kind)
        _check_count(kind, len(args))
        if kind is ExprKind.expr_ref and not is_expr(args[0]):
            raise TypeError("a reference expression must refer to an expression")
        self.kind = kind
        self.elements = tuple(args)

    def __repr__(self) -> str:
        inner = ", ".join(repr(element) for element in self.elements)
        return f"{type(self).__name__}({self.kind.name}, {inner})"

    def __bool__(self) -> bool:
        """Refuse truth testing: comparisons build expressions, not booleans."""
        description = f"{self.kind.name} expression"
        message = (
            f"the truth value of a {description} is undefined; evaluate it first"
        )
        raise TypeError(message)

    __hash__ = object.__hash__
    __iter__ = None

    def __call__(self, *args):
        """Build a call expression with this expression as the callable."""
        return make_expression(ExprKind.call, self, *args, template=type(self))

    def __getitem__(self, index):
        """Build a subscript expression."""
        return make_expression(ExprKind.subscript, self, index, template=type(self))

    def comma(self, other):
        """Build a comma expression: evaluate self, then other."""
        return make_expression(ExprKind.comma, self, other, template=type(self))


def _unary_op(kind: ExprKind):
    def method(self):
        return make_expression(kind, self, template=type(self))

    return method


def _binary_op(kind: ExprKind):
    def method(self, other):
        return make_expression(kind, self, other, template=type(self))

    return method


def _reflected_op(kind: ExprKind):
    def method(self, other):
        return make_expression(kind, other, self, template=type(self))

    return method


for _name, _kind in (
    ("pos", ExprKind.unary_plus),
    ("neg", ExprKind.negate),
    ("invert", ExprKind.complement),
):
    setattr(Expression, f"__{_name}__", _unary_op(_kind))

for _name, _kind in (
    ("add", ExprKind.plus),
    ("sub", ExprKind.minus),
    ("mul", ExprKind.multiplies),
    ("truediv", ExprKind.divides),
    ("mod", ExprKind.modulus),
    ("lshift", ExprKind.shift_left),
    ("rshift", ExprKind.shift_right),
    ("and", ExprKind.bitwise_and),
    ("or", ExprKind.bitwise_or),
    ("xor", ExprKind.bitwise_xor),
):
    setattr(Expression, f"__{_name}__", _binary_op(_kind))
    setattr(Expression, f"__r{_name}__", _reflected_op(_kind))

for _name, _kind in (
    ("lt", ExprKind.less),
    ("le", ExprKind.less_equal),
    ("gt", ExprKind.greater),
    ("ge", ExprKind.greater_equal),
    ("eq", ExprKind.equal_to),
    ("ne", ExprKind.not_equal_to),
):
    setattr(Expression, f"__{_name}__", _binary_op(_kind))


def is_expr(x) -> bool:
    """Return True if x has an ExprKind ``kind`` and a tuple of ``elements``."""
    if isinstance(x, type):
        return False
    return isinstance(getattr(x, "kind", None), ExprKind) and isinstance(
        getattr(x, "elements", None), tuple
    )


def make_terminal(value, template: Template = Expression):
    """Wrap a non-expression value in a terminal expression."""
    if is_expr(value):
        raise TypeError("make_terminal() is only defined for non expressions")
    return template(ExprKind.terminal, value)


def make_expression(kind, *args, template: Template = Expression):
    """Build an expression of the given kind from args.

    Expression arguments become operands as they are.  Any other argument is
    wrapped in a terminal first.  A terminal holds its argument directly, and a
    reference must be given an expression.
    """
    kind = ExprKind(kind)
    _check_count(kind, len(args))
    if kind is ExprKind.terminal:
        return make_terminal(args[0], template)
    if kind is ExprKind.expr_ref:
        return template(kind, _resolve_ref_target(args[0]))
    operands = [as_expr(arg, template) for arg in args]
    return template(kind, *operands)


def _resolve_ref_target(expr):
    if not is_expr(expr):
        raise TypeError("only expressions can be referenced")
    if expr.kind is ExprKind.expr_ref:
        return expr.elements[0]
    return expr


def make_ref(expr):
    """Return a reference expression that refers to expr."""
    template = type(expr) if isinstance(expr, Expression) else Expression
    return template(ExprKind.expr_ref, _resolve_ref_target(expr))


def placeholder(index):
    """Return a terminal that holds the placeholder with the given index."""
    return make_terminal(Placeholder(index))


def if_else(cond, then, else_):
    """Build an if_else expression; non-expression arguments become terminals."""
    template = next(
        (type(arg) for arg in (cond, then, else_) if isinstance(arg, Expression)),
        Expression,
    )
    return make_expression(ExprKind.if_else, cond, then, else_, template=template)


def as_expr(x, template: Template = Expression):
    """Return x if it is an expression, otherwise x wrapped in a terminal."""
    if is_expr(x):
        return x
    return make_terminal(x, template)


def deref(expr):
    """Return the expression that a reference expression refers to."""
    if not is_expr(expr):
        raise TypeError("deref() is only defined for expressions")
    if expr.kind is not ExprKind.expr_ref:
        raise TypeError("deref() is only defined for expr_ref-kind expressions")
    return expr.elements[0]


def _resolve(expr):
    while expr.kind is ExprKind.expr_ref:
        expr = expr.elements[0]
    return expr


def value(x):
    """Return the sole element of a terminal or unary expression.

    References are followed first.  Anything else, expression or not, comes
    back unchanged.
    """
    if not is_expr(x):
        return x
    x = _resolve(x)
    if x.kind.arity() is ExprArity.one:
        return x.elements[0]
    return x


def get(expr, index):
    """Return element ``index`` of expr, following references first."""
    if not is_expr(expr):
        raise TypeError("get() is only defined for expressions")
    expr = _resolve(expr)
    index = operator.index(index)
    if not 0 <= index < len(expr.elements):
        raise IndexError(
            f"index {index} is not valid for an expression with "
            f"{len(expr.elements)} element(s)"
        )
    return expr.elements[index]


def _checked(expr, name: str, accept: Callable[[ExprKind], bool], what: str):
    if not is_expr(expr):
        raise TypeError(f"{name}() is only defined for expressions")
    target = _resolve(expr)
    if not accept(target.kind):
        raise TypeError(f"{name}() is only defined for {what} expressions")
    return target


def _is_binary(kind: ExprKind) -> bool:
    return kind.arity() is ExprArity.two


def _is_if_else(kind: ExprKind) -> bool:
    return kind is ExprKind.if_else


def left(expr):
    """Return the left operand of a binary expression."""
    return get(_checked(expr, "left", _is_binary, "binary"), 0)


def right(expr):
    """Return the right operand of a binary expression."""
    return get(_checked(expr, "right", _is_binary, "binary"), 1)


def cond(expr):
    """Return the condition of an if_else expression."""
    return get(_checked(expr, "cond", _is_if_else, "if_else"), 0)


def then(expr):
    """Return the then-branch of an if_else expression."""
    return get(_checked(expr, "then", _is_if_else, "if_else"), 1)


def else_(expr):
    """Return the else-branch of an if_else expression."""
    return get(_checked(expr, "else_", _is_if_else, "if_else"), 2)


def _is_call(kind: ExprKind) -> bool:
    return kind.arity() is ExprArity.n


def callable(expr):  # noqa: A001 - part of the public vocabulary
    """Return the callable of a call expression."""
    return get(_checked(expr, "callable", _is_call, "call"), 0)


def argument(expr, index):
    """Return argument ``index`` (counting from 0) of a call expression."""
    target = _checked(expr, "argument", _is_call, "call")
    index = operator.index(index)
    if not 0 <= index < len(target.elements) - 1:
        raise IndexError(f"{index} is not a valid call-expression argument index")
    return get(target, index + 1)