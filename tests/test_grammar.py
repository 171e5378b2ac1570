"""
Unit tests for the amb grammar.
"""
import pytest
from lark import Lark
from lark.exceptions import UnexpectedInput

from amb.grammar import amb_grammar


@pytest.fixture
def parser():
    """Create a parser instance for testing."""
    return Lark(amb_grammar, parser='earley', propagate_positions=True)


def statement_kinds(tree):
    body = next(tree.find_data('body'))
    return [child.data for child in body.children]


class TestBlockParsing:
    """Tests for the outer block structure."""

    def test_wrapped_block(self, parser):
        tree = parser.parse('amb { let x = choice(1..=5); x }')
        assert len(list(tree.find_data('amb_block'))) == 1

    def test_bare_body(self, parser):
        tree = parser.parse('let x = choice([1, 2]); x')
        assert statement_kinds(tree) == ['bind_stmt', 'tail_result']

    def test_empty_source(self, parser):
        tree = parser.parse('')
        assert statement_kinds(tree) == []

    def test_empty_block(self, parser):
        tree = parser.parse('amb { }')
        assert statement_kinds(tree) == []

    def test_comments_ignored(self, parser):
        code = '''
        // pick one
        amb {
            # a number
            let x = choice(1..3); /* inline */
            x
        }
        '''
        tree = parser.parse(code)
        assert statement_kinds(tree) == ['bind_stmt', 'tail_result']


class TestStatementParsing:
    """Tests for the statement forms."""

    def test_all_statement_kinds(self, parser):
        code = '''
        let x = choice(1..=5);
        let y = x * 2;
        require(y > 4);
        print(y);
        return (x, y);
        '''
        tree = parser.parse(code)
        assert statement_kinds(tree) == ['bind_stmt', 'let_stmt', 'require_stmt', 'expr_stmt', 'return_result']

    def test_return_without_semicolon(self, parser):
        tree = parser.parse('return 1')
        assert statement_kinds(tree) == ['return_result']

    def test_statements_without_result_still_parse(self, parser):
        tree = parser.parse('let x = choice(1..3); require(x > 1);')
        assert statement_kinds(tree) == ['bind_stmt', 'require_stmt']

    def test_destructuring_pattern(self, parser):
        tree = parser.parse('let (a, (b, c)) = choice(items); a')
        assert len(list(tree.find_data('tuple_pattern'))) == 2

    def test_non_choice_let_is_let_stmt(self, parser):
        tree = parser.parse('let xs = pick(1..3); xs')
        assert statement_kinds(tree) == ['let_stmt', 'tail_result']

    def test_return_only_at_end(self, parser):
        with pytest.raises(UnexpectedInput):
            parser.parse('return 1; let x = choice(1..2); x')

    def test_require_needs_parentheses(self, parser):
        with pytest.raises(UnexpectedInput):
            parser.parse('require x > 1; x')

    def test_choice_is_reserved(self, parser):
        with pytest.raises(UnexpectedInput):
            parser.parse('let x = choice(1..3) + 1; x')


class TestExpressionParsing:
    """Tests for expressions."""

    @pytest.mark.parametrize("expr", [
        'a + b * c',
        'x != y && y != z || !done',
        'not flag',
        '-x + 3',
        'abs(q1 - q0) != 1',
        'board[row].cols[0]',
        '"red" in colors',
        "('a', 'b')",
        '(x,)',
        '()',
        '[]',
        '[1, 2, 3,]',
        'f()',
        'range(0, n, 2)',
        'a ** 2 % 7',
    ])
    def test_expression_forms(self, parser, expr):
        tree = parser.parse(f'{expr}')
        assert statement_kinds(tree) == ['tail_result']

    def test_inclusive_and_exclusive_ranges(self, parser):
        tree = parser.parse('let x = choice(1..=5); let y = choice(0..x); y')
        assert len(list(tree.find_data('range_expr'))) == 2
