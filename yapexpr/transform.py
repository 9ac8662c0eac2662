"""Transforms over expression trees, and the built-in evaluation of them.

A transform is any object that reacts to some expression nodes.  It can
react in two ways.

Tag handlers are methods named ``on_<kind>``, such as ``on_terminal`` or
``on_plus``.  One is called with the node's elements.  Each element that is
a terminal, or a reference to one, is passed as the value it holds.  Other
operand expressions are passed as they are, with references followed.

An expression handler is the transform itself when it is callable.  It is
called with the whole node.

Either handler may return ``NotImplemented`` to decline a node.  For each
node the transforms are tried in order, and within one transform the tag
handler goes before the expression handler.  When nothing matches,
:func:`transform` rebuilds the node from its transformed operands and leaves
terminals as they are.  :func:`transform_strict` raises
:class:`NoMatchingTransform` instead.
"""

from __future__ import annotations

import builtins
import operator
from dataclasses import dataclass
from typing import Any

from .expression import (
    Expression,
    ExprKind,
    Placeholder,
    as_expr,
    is_expr,
    make_expression,
    make_terminal,
)


class NoMatchingTransform(TypeError):
    """Raised by transform_strict() when no transform accepts an expression."""


def _resolve(expr):
    while expr.kind is ExprKind.expr_ref:
        expr = expr.elements[0]
    return expr


def _tag_operand(element):
    if not is_expr(element):
        return element
    element = _resolve(element)
    if element.kind is ExprKind.terminal:
        return element.elements[0]
    return element


def _apply(expr, xform):
    handler = getattr(xform, f"on_{expr.kind.name}", None)
    if handler is not None:
        result = handler(*(_tag_operand(element) for element in expr.elements))
        if result is not NotImplemented:
            return result
    if builtins.callable(xform):
        return xform(expr)
    return NotImplemented


def _transform(expr, transforms, strict: bool):
    expr = _resolve(expr)
    for xform in transforms:
        result = _apply(expr, xform)
        if result is not NotImplemented:
            return result
    if strict:
        raise NoMatchingTransform(
            f"no transform matches the {expr.kind.name} expression {expr!r}"
        )
    if expr.kind is ExprKind.terminal:
        return expr
    children = [
        _transform(element, transforms, False) if is_expr(element) else element
        for element in expr.elements
    ]
    template = type(expr) if isinstance(expr, Expression) else Expression
    return make_expression(expr.kind, *children, template=template)


def _check_arguments(expr, transforms) -> None:
    if not is_expr(expr):
        raise TypeError("transform() is only defined for expressions")
    if not transforms:
        raise TypeError("transform() needs at least one transform")
    if any(is_expr(xform) for xform in transforms):
        raise TypeError("an expression cannot be used as a transform")


def transform(expr, *args):
    """Transform expr with the given transforms, rebuilding unmatched nodes."""
    _check_arguments(expr, args)
    return _transform(expr, args, strict=False)


def transform_strict(expr, *args):
    """Transform expr with the first transform that matches it.

    Raises NoMatchingTransform when none of them matches.
    """
    _check_arguments(expr, args)
    return _transform(expr, args, strict=True)


def _lookup(values, slot: Placeholder):
    if slot.index > len(values):
        raise IndexError(
            f"placeholder {slot.index} has no value; "
            f"only {len(values)} value(s) were given"
        )
    return values[slot.index - 1]


class _Replacements:
    """Replaces placeholder terminals with terminals holding given values."""

    __slots__ = ("_values",)

    def __init__(self, values):
        self._values = tuple(values)

    def on_terminal(self, item):
        if not isinstance(item, Placeholder):
            return NotImplemented
        return as_expr(_lookup(self._values, item))


_UNARY = {
    ExprKind.unary_plus: operator.pos,
    ExprKind.negate: operator.neg,
    ExprKind.complement: operator.invert,
    ExprKind.logical_not: operator.not_,
}

_BINARY = {
    ExprKind.shift_left: operator.lshift,
    ExprKind.shift_right: operator.rshift,
    ExprKind.multiplies: operator.mul,
    ExprKind.divides: operator.truediv,
    ExprKind.modulus: operator.mod,
    ExprKind.plus: operator.add,
    ExprKind.minus: operator.sub,
    ExprKind.less: operator.lt,
    ExprKind.greater: operator.gt,
    ExprKind.less_equal: operator.le,
    ExprKind.greater_equal: operator.ge,
    ExprKind.equal_to: operator.eq,
    ExprKind.not_equal_to: operator.ne,
    ExprKind.bitwise_and: operator.and_,
    ExprKind.bitwise_or: operator.or_,
    ExprKind.bitwise_xor: operator.xor,
    ExprKind.subscript: operator.getitem,
    ExprKind.shift_left_assign: operator.ilshift,
    ExprKind.shift_right_assign: operator.irshift,
    ExprKind.multiplies_assign: operator.imul,
    ExprKind.divides_assign: operator.itruediv,
    ExprKind.modulus_assign: operator.imod,
    ExprKind.plus_assign: operator.iadd,
    ExprKind.minus_assign: operator.isub,
    ExprKind.bitwise_and_assign: operator.iand,
    ExprKind.bitwise_or_assign: operator.ior,
    ExprKind.bitwise_xor_assign: operator.ixor,
}


class _Evaluation:
    """Evaluates a whole expression with the built-in operator meanings."""

    __slots__ = ("_values",)

    def __init__(self, values):
        self._values = tuple(values)

    def __call__(self, expr):
        if not is_expr(expr):
            return expr
        expr = _resolve(expr)
        kind = expr.kind
        elements = expr.elements
        if kind is ExprKind.terminal:
            item = elements[0]
            if isinstance(item, Placeholder):
                return _lookup(self._values, item)
            return item
        if kind is ExprKind.if_else:
            condition, when_true, when_false = elements
            return self(when_true) if self(condition) else self(when_false)
        if kind is ExprKind.logical_and:
            return bool(self(elements[0])) and bool(self(elements[1]))
        if kind is ExprKind.logical_or:
            return bool(self(elements[0])) or bool(self(elements[1]))
        if kind is ExprKind.comma:
            self(elements[0])
            return self(elements[1])
        if kind is ExprKind.call:
            function, *arguments = [self(element) for element in elements]
            return function(*arguments)
        if kind in _UNARY:
            return _UNARY[kind](self(elements[0]))
        if kind in _BINARY:
            return _BINARY[kind](self(elements[0]), self(elements[1]))
        raise TypeError(f"{kind.name} expressions have no built-in evaluation")


def replacements(*args):
    """Return a transform that replaces placeholder N with the Nth value."""
    return _Replacements(args)


def replace_placeholders(expr, *args):
    """Return expr with its placeholders replaced by terminals of the values."""
    if not is_expr(expr):
        raise TypeError("replace_placeholders() is only defined for expressions")
    return transform(expr, replacements(*args))


def evaluation(*args):
    """Return a transform that evaluates an expression, filling placeholders."""
    return _Evaluation(args)


def evaluate(expr, *args):
    """Evaluate expr, using args as the values of placeholders 1, 2, ..."""
    if not is_expr(expr):
        raise TypeError("evaluate() is only defined for expressions")
    return transform(expr, evaluation(*args))


@dataclass(frozen=True)
class ExpressionFunction:
    """A callable that evaluates its expression with the call's arguments."""

    expr: Any

    def __call__(self, *args):
        return evaluate(self.expr, *args)


def make_expression_function(expr):
    """Wrap expr in a callable that evaluates it."""
    if not is_expr(expr):
        raise TypeError("make_expression_function() is only defined for expressions")
    return ExpressionFunction(expr)