# yapexpr

Build expression trees with ordinary Python operators, then evaluate them
or rewrite them with transforms. Nothing is computed until you ask for it.

The package has two modules:

- `yapexpr.expression`: expression nodes, the operators that build them,
  and functions that take them apart.
- `yapexpr.transform`: transforms over expression trees, and the built-in
  evaluation.

## Install

```
pip install yapexpr
```

It has no runtime dependencies. To run the tests, install the `test` extra
and run `pytest`.

## Building expressions

An `Expression` has a `kind` (an `ExprKind`) and a tuple of `elements`.
`make_terminal(value)` wraps a value in a terminal expression. Operators on
expressions return new, unevaluated expressions. A plain value on either side
of an operator becomes a terminal.

```python
from yapexpr.expression import ExprKind, make_terminal, left, value
from yapexpr.transform import evaluate

x = make_terminal(42.0)
y = make_terminal(3.0)

expr = x + y
assert expr.kind is ExprKind.plus
assert value(left(expr)) == 42.0
assert evaluate(expr) == 45.0
```

Supported operators are unary `+`, `-` and `~`, the binary `+ - * / % << >>
& | ^` (on either side), and the comparisons `< <= > >= == !=`. Comparisons
build expressions too, so an `Expression` has no truth value: `bool(expr)`
raises `TypeError`.

Calling an expression builds a `call` expression, and indexing one builds a
`subscript` expression. `expr.comma(other)` builds a `comma` expression.
`if_else(cond, then, else_)` builds an `if_else` expression. Python's `and`,
`or` and `not` cannot be overloaded, so `logical_and`, `logical_or`,
`logical_not` and the other kinds are built with
`make_expression(kind, *args)`. It checks the number of operands against
`ExprKind.arity()` and wraps non-expression operands in terminals.

`placeholder(n)` (with n at least 1) is a terminal holding a `Placeholder`,
a slot that is filled in at evaluation time:

```python
from yapexpr.expression import placeholder

p1, p2 = placeholder(1), placeholder(2)
assert evaluate(p1 * p2, 6, 9) == 54
```

Any object with a `kind` attribute holding an `ExprKind` and an `elements`
tuple counts as an expression for `is_expr` and for the functions below.
Functions that create nodes take an optional `template`, a callable
`template(kind, *elements)`. `Expression` and its subclasses qualify, and
operators on a subclass build nodes of that subclass.

## Taking expressions apart

- `get(expr, i)` returns element `i`. It raises `IndexError` when out of
  range.
- `left`, `right` work on binary expressions. `cond`, `then`, `else_` work on
  `if_else` expressions. `callable` and `argument(expr, i)` work on call
  expressions, with arguments counted from 0. Each raises `TypeError` for the
  wrong kind.
- `value(x)` returns the sole element of a terminal or unary expression. Any
  other input comes back unchanged.
- `make_ref(expr)` builds an `expr_ref` node. `deref` returns its target.
  The other accessors follow references by themselves.
- `as_expr(x)` returns expressions unchanged and wraps anything else in a
  terminal.

## Evaluating

`evaluate(expr, *values)` evaluates with the usual Python meaning of each
operator, and fills placeholder `n` with `values[n - 1]`:

- A missing value raises `IndexError`.
- `if_else`, `logical_and` and `logical_or` short-circuit.
- `comma` evaluates both sides and returns the right one.
- A call expression calls its evaluated callable:

```python
import math
from yapexpr.expression import make_terminal, placeholder
from yapexpr.transform import evaluate

root = make_terminal(math.sqrt)(placeholder(1)) + 8.0
assert evaluate(root, 9.0) == 11.0
```

Kinds with no built-in meaning, such as `assign`, raise `TypeError`.

`make_expression_function(expr)` returns an `ExpressionFunction`. Calling it
evaluates the expression with the call's arguments:

```python
from yapexpr.transform import make_expression_function

f = make_expression_function(placeholder(1) + placeholder(2))
assert f(8, 11) == 19
```

## Transforms

`transform(expr, *transforms)` walks an expression. A transform reacts to a
node in one of two ways:

- A tag handler is a method named `on_<kind>`, such as `on_terminal` or
  `on_plus`. It is called with the node's elements. A terminal operand, or a
  reference to one, is passed as the value it holds.
- If the transform is callable, it is called with the whole node.

A handler returns `NotImplemented` to decline a node. The transforms are
tried in order, and within one transform the tag handler comes first. When
nothing matches, `transform` leaves terminals as they are and rebuilds other
nodes from their transformed operands. `transform_strict` raises
`NoMatchingTransform` (a `TypeError`) instead.

```python
from yapexpr.expression import make_terminal
from yapexpr.transform import evaluate, transform

class PlusToMinus:
    def on_plus(self, lhs, rhs):
        return make_terminal(lhs) - make_terminal(rhs)

x, y = make_terminal(42.0), make_terminal(3.0)
assert evaluate(transform(x + y, PlusToMinus())) == 39.0
```

Two transforms come with the package:

- `replacements(*values)` turns placeholder terminals into terminals holding
  the values. `replace_placeholders(expr, *values)` applies it.
- `evaluation(*values)` is the transform behind `evaluate`.

## What it does not do

The package only builds, inspects, transforms and evaluates expression trees
in memory. It has no command-line tool, no pretty-printer for expressions,
and no operator-overloading hooks for user types that are not expressions.