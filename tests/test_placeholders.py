import pytest

from db.placeholders import to_pyformat


def test_positional_placeholders_become_pyformat():
    sql, params = to_pyformat("SELECT * FROM t WHERE a = $1 AND b = $2", ["x", 2])
    assert sql == "SELECT * FROM t WHERE a = %s AND b = %s"
    assert params == ("x", 2)


def test_repeated_and_reordered_placeholders():
    sql, params = to_pyformat("SELECT $2, $1, $2", [10, 20])
    assert sql == "SELECT %s, %s, %s"
    assert params == (20, 10, 20)


def test_double_digit_placeholder():
    args = list(range(1, 12))
    _, params = to_pyformat("SELECT $11, $1", args)
    assert params == (11, 1)


def test_literal_percent_is_escaped_when_binding():
    sql, params = to_pyformat("SELECT name FROM t WHERE name LIKE 'dcn%' AND id = $1", [5])
    assert sql == "SELECT name FROM t WHERE name LIKE 'dcn%%' AND id = %s"
    assert params == (5,)


def test_template_without_placeholders_is_untouched():
    sql, params = to_pyformat("SELECT name FROM t WHERE name LIKE 'dcn%'", [])
    assert sql == "SELECT name FROM t WHERE name LIKE 'dcn%'"
    assert params is None


def test_missing_argument_raises():
    with pytest.raises(ValueError):
        to_pyformat("SELECT $1, $2", ["only one"])


def test_zero_placeholder_raises():
    with pytest.raises(ValueError):
        to_pyformat("SELECT $0", ["x"])


def test_placeholder_text_inside_string_literal_is_not_bound():
    sql, params = to_pyformat("SELECT '$1 off' AS promo, id FROM t WHERE id = $1", (7,))
    assert sql == "SELECT '$1 off' AS promo, id FROM t WHERE id = %s"
    assert params == (7,)


def test_doubled_quote_stays_inside_literal():
    sql, params = to_pyformat("SELECT 'it''s $2' FROM t WHERE a = $1", ("x",))
    assert sql == "SELECT 'it''s $2' FROM t WHERE a = %s"
    assert params == ("x",)


def test_escape_string_with_backslash_quote():
    sql, params = to_pyformat(r"SELECT E'a\'$1' FROM t WHERE a = $1", ("x",))
    assert sql == r"SELECT E'a\'$1' FROM t WHERE a = %s"
    assert params == ("x",)


def test_double_quoted_identifier_is_not_bound():
    sql, params = to_pyformat('SELECT "col$1" FROM t WHERE a = $1', (3,))
    assert sql == 'SELECT "col$1" FROM t WHERE a = %s'
    assert params == (3,)


def test_line_comment_is_not_bound():
    sql, params = to_pyformat("SELECT a -- filter on $2\nFROM t WHERE a = $1", (3,))
    assert sql == "SELECT a -- filter on $2\nFROM t WHERE a = %s"
    assert params == (3,)


def test_block_comment_is_not_bound():
    sql, params = to_pyformat("SELECT /* was $2, /* nested $3 */ */ a FROM t WHERE a = $1", (3,))
    assert sql == "SELECT /* was $2, /* nested $3 */ */ a FROM t WHERE a = %s"
    assert params == (3,)


def test_dollar_quoted_body_is_not_bound():
    sql, params = to_pyformat("SELECT $$cost $1$$, $fn$ $2 $fn$ FROM t WHERE a = $1", (3,))
    assert sql == "SELECT $$cost $1$$, $fn$ $2 $fn$ FROM t WHERE a = %s"
    assert params == (3,)


def test_placeholder_only_inside_literal_binds_nothing():
    sql, params = to_pyformat("SELECT '$1'", (3,))
    assert sql == "SELECT '$1'"
    assert params is None


def test_percent_inside_literal_escaped_alongside_binding():
    sql, _ = to_pyformat("SELECT '50%' /* 10% */ FROM t WHERE a = $1", (3,))
    assert sql == "SELECT '50%%' /* 10%% */ FROM t WHERE a = %s"
