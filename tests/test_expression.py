import pytest

from yapexpr.expression import (
    ExprArity,
    ExprKind,
    Expression,
    Placeholder,
    argument,
    as_expr,
    callable,
    cond,
    deref,
    else_,
    get,
    if_else,
    is_expr,
    left,
    make_expression,
    make_ref,
    make_terminal,
    placeholder,
    right,
    then,
    value,
)


class UserExpr(Expression):
    __slots__ = ()


class AlternateExpr1:
    kind = ExprKind.plus
    elements = ()


class AlternateExpr2:
    kind = ExprKind.plus
    elements = (1, 2.5)


class NonExpr1:
    pass


class NonExpr2:
    elements = (1, 2.5)


class NonExpr3:
    kind = 0
    elements = (1, 2.5)


class NonExpr4:
    def __init__(self):
        self.kind = 0
        self.elements = (1, 2.5)


class NonExpr5:
    kind = ExprKind.plus


class NonExpr6:
    kind = ExprKind.plus
    elements = 1


# is_expr


def test_is_expr_accepts_expressions():
    assert is_expr(make_terminal(1.0)) is True
    assert is_expr(placeholder(1)) is True
    assert is_expr(+make_terminal(1.0)) is True
    assert is_expr(make_terminal(1.0) + make_terminal(2.0)) is True


def test_is_expr_accepts_duck_typed_expressions():
    assert is_expr(AlternateExpr1()) is True
    assert is_expr(AlternateExpr2()) is True


@pytest.mark.parametrize(
    "candidate", [1, NonExpr1(), NonExpr2(), NonExpr3(), NonExpr4(), NonExpr5(), NonExpr6()]
)
def test_is_expr_rejects_non_expressions(candidate):
    assert is_expr(candidate) is False


def test_get_works_on_duck_typed_expression():
    assert get(AlternateExpr2(), 1) == 2.5


# deref and value


@pytest.mark.parametrize("template", [Expression, UserExpr])
def test_deref_of_reference_operand(template):
    unity = make_terminal(1.0, template)
    plus_expr = make_ref(unity) + make_terminal(1, template)
    assert type(plus_expr) is template
    ref = plus_expr.elements[0]
    assert ref.kind is ExprKind.expr_ref
    assert deref(ref) is unity
    assert value(ref) == 1.0


def test_deref_rejects_non_reference():
    with pytest.raises(TypeError):
        deref(make_terminal(1.0))
    with pytest.raises(TypeError):
        deref(3)


def test_make_ref_of_ref_refers_to_same_target():
    a = make_terminal(2)
    assert deref(make_ref(make_ref(a))) is a


def test_make_ref_rejects_non_expression():
    with pytest.raises(TypeError):
        make_ref(5)


def test_value_of_non_expression_is_unchanged():
    obj = object()
    assert value(obj) is obj


def test_value_of_unary_is_operand():
    x = make_terminal(42)
    assert value(-x) is x
    assert value(value(-x)) == 42


def test_value_of_binary_is_itself():
    e = make_terminal(1) + 2
    assert value(e) is e


# left / right


@pytest.mark.parametrize("template", [Expression, UserExpr])
def test_left_returns_reference_element(template):
    unity = make_terminal(1.0, template)
    plus_expr = make_ref(unity) + make_terminal(1, template)
    assert left(plus_expr) is plus_expr.elements[0]
    assert deref(left(plus_expr)) is unity
    assert value(right(plus_expr)) == 1


@pytest.mark.parametrize("template", [Expression, UserExpr])
def test_left_through_reference(template):
    unity = make_terminal(1.0, template)
    plus_expr = make_ref(unity) + make_terminal(1, template)
    plus_plus_expr = make_ref(plus_expr) + make_terminal(1, template)
    plus_expr_ref = plus_plus_expr.elements[0]
    assert left(plus_expr_ref) is plus_expr.elements[0]
    assert value(left(plus_expr_ref)) == 1.0


def test_value_of_left_of_term_sum():
    expr = make_terminal(13) + make_terminal(42)
    assert value(left(expr)) == 13
    assert value(right(expr)) == 42


def test_left_rejects_non_binary():
    with pytest.raises(TypeError):
        left(make_terminal(1))
    with pytest.raises(TypeError):
        right(-make_terminal(1))


# placeholders


def test_placeholder_terminal():
    p1 = placeholder(1)
    assert p1.kind is ExprKind.terminal
    assert value(p1) == Placeholder(1)


def test_placeholder_plus_terminal():
    p1 = placeholder(1)
    unity = make_terminal(1.0)
    expr = make_ref(p1) + make_ref(unity)
    assert expr.kind is ExprKind.plus
    assert deref(left(expr)) is p1
    assert deref(right(expr)) is unity


def test_placeholder_plus_placeholder():
    p1 = placeholder(1)
    expr = make_ref(p1) + placeholder(2)
    assert value(right(expr)).index == 2
    assert value(left(expr)).index == 1


def test_placeholder_index_must_be_positive():
    with pytest.raises(ValueError):
        placeholder(0)
    with pytest.raises(TypeError):
        placeholder("1")


# term + term / term + x / x + term


def test_term_plus_term():
    unity = make_terminal(1.0)
    expr = unity + make_terminal("3")
    assert left(expr) is unity
    assert value(right(expr)) == "3"


def test_term_plus_string():
    unity = make_terminal(1.0)
    expr = unity + "3"
    assert expr.kind is ExprKind.plus
    assert left(expr) is unity
    assert right(expr).kind is ExprKind.terminal
    assert value(right(expr)) == "3"


def test_term_plus_list_keeps_same_object():
    ints = [1, 2]
    expr = make_terminal(1.0) + ints
    assert value(right(expr)) is ints


def test_term_plus_int():
    expr = make_terminal(1.0) + 1
    assert value(right(expr)) == 1


def test_string_plus_term():
    unity = make_terminal(1.0)
    expr = "3" + unity
    assert value(left(expr)) == "3"
    assert right(expr) is unity


def test_list_plus_term():
    ints = [1, 2]
    unity = make_terminal(1.0)
    expr = ints + unity
    assert value(left(expr)) is ints
    assert right(expr) is unity


def test_int_plus_term():
    unity = make_terminal(1.0)
    expr = 1 + unity
    assert value(left(expr)) == 1
    assert right(expr) is unity


# operators


@pytest.mark.parametrize(
    "build, kind",
    [
        (lambda a: a - 1, ExprKind.minus),
        (lambda a: a * 1, ExprKind.multiplies),
        (lambda a: a / 1, ExprKind.divides),
        (lambda a: a % 1, ExprKind.modulus),
        (lambda a: a << 1, ExprKind.shift_left),
        (lambda a: a >> 1, ExprKind.shift_right),
        (lambda a: a & 1, ExprKind.bitwise_and),
        (lambda a: a | 1, ExprKind.bitwise_or),
        (lambda a: a ^ 1, ExprKind.bitwise_xor),
        (lambda a: a < 1, ExprKind.less),
        (lambda a: a <= 1, ExprKind.less_equal),
        (lambda a: a > 1, ExprKind.greater),
        (lambda a: a >= 1, ExprKind.greater_equal),
        (lambda a: a == 1, ExprKind.equal_to),
        (lambda a: a != 1, ExprKind.not_equal_to),
        (lambda a: -a, ExprKind.negate),
        (lambda a: +a, ExprKind.unary_plus),
        (lambda a: ~a, ExprKind.complement),
        (lambda a: a[1], ExprKind.subscript),
        (lambda a: a.comma(1), ExprKind.comma),
    ],
)
def test_operator_kinds(build, kind):
    a = make_terminal(5)
    expr = build(a)
    assert expr.kind is kind
    assert expr.elements[0] is a


def test_reflected_subtraction_keeps_order():
    a = make_terminal(5)
    expr = 10 - a
    assert value(left(expr)) == 10
    assert right(expr) is a


def test_user_template_is_propagated():
    a = make_terminal(1, UserExpr)
    expr = (a + 2) * 3
    assert type(expr) is UserExpr
    assert type(right(expr)) is UserExpr


def test_call_expression():
    f = make_terminal(abs)
    a = make_terminal(3)
    expr = f(1, a)
    assert expr.kind is ExprKind.call
    assert callable(expr) is f
    assert value(argument(expr, 0)) == 1
    assert argument(expr, 1) is a
    with pytest.raises(IndexError):
        argument(expr, 2)


def test_if_else_accessors():
    a = make_terminal(1)
    expr = if_else(True, a, 2)
    assert expr.kind is ExprKind.if_else
    assert value(cond(expr)) is True
    assert then(expr) is a
    assert value(else_(expr)) == 2


def test_if_else_uses_expression_template():
    expr = if_else(True, make_terminal(1, UserExpr), 2)
    assert type(expr) is UserExpr
    assert type(cond(expr)) is UserExpr


def test_cond_rejects_other_kinds():
    with pytest.raises(TypeError):
        cond(make_terminal(1) + 2)


def test_expression_truth_value_is_an_error():
    with pytest.raises(TypeError):
        bool(make_terminal(1))


def test_expression_is_not_iterable():
    with pytest.raises(TypeError):
        iter(make_terminal(1))


# construction


def test_make_expression_wraps_values():
    expr = make_expression(ExprKind.negate, 3)
    assert value(value(expr)) == 3


def test_make_expression_terminal_holds_value():
    assert value(make_expression(ExprKind.terminal, 7)) == 7


def test_make_expression_checks_arity():
    with pytest.raises(ValueError):
        make_expression(ExprKind.plus, 1)
    with pytest.raises(ValueError):
        make_expression(ExprKind.if_else, 1, 2)


def test_constructor_checks_arity():
    with pytest.raises(ValueError):
        Expression(ExprKind.plus, 1)
    with pytest.raises(ValueError):
        Expression(ExprKind.call)
    with pytest.raises(TypeError):
        Expression(ExprKind.expr_ref, 5)


def test_make_terminal_rejects_expression():
    with pytest.raises(TypeError):
        make_terminal(make_terminal(1))


def test_as_expr():
    a = make_terminal(1)
    assert as_expr(a) is a
    assert value(as_expr(5)) == 5
    assert type(as_expr(5, UserExpr)) is UserExpr


def test_get_index_errors():
    expr = make_terminal(1) + 2
    with pytest.raises(IndexError):
        get(expr, 2)
    with pytest.raises(TypeError):
        get(5, 0)


@pytest.mark.parametrize(
    "kind, arity",
    [
        (ExprKind.expr_ref, ExprArity.one),
        (ExprKind.terminal, ExprArity.one),
        (ExprKind.post_dec, ExprArity.one),
        (ExprKind.shift_left, ExprArity.two),
        (ExprKind.plus, ExprArity.two),
        (ExprKind.subscript, ExprArity.two),
        (ExprKind.if_else, ExprArity.three),
        (ExprKind.call, ExprArity.n),
    ],
)
def test_kind_arity(kind, arity):
    assert kind.arity() is arity