import math
import pytest

from shared.utils import get_nested, eval_math_expressions


class TestGetNested:

    def test_existing_path(self):
        data = {'settings': {'on_error': 'skip'}}
        assert get_nested(data, 'settings.on_error', 'stop') == 'skip'

    def test_missing_path_returns_default(self):
        assert get_nested({'settings': {}}, 'settings.on_error', 'stop') == 'stop'

    def test_non_dict_intermediate(self):
        assert get_nested({'settings': 5}, 'settings.on_error', None) is None


class TestEvalMathExpressions:

    def test_simple_math(self):
        result = eval_math_expressions({'val': '(10 + 5)', 'div': '(10 / 4)'})
        assert result['val'] == 15
        assert result['div'] == 2.5

    def test_constants(self):
        assert math.isclose(eval_math_expressions('(pi)'), math.pi)

    def test_nested_structure(self):
        data = {'ops': [['add', '(1+1)', '(3*3)', 1]], 'fixed': 10}
        result = eval_math_expressions(data)
        assert result['ops'][0] == ['add', 2, 9, 1]
        assert result['fixed'] == 10

    def test_plain_strings_untouched(self):
        assert eval_math_expressions('add') == 'add'
        assert eval_math_expressions('[[10,1],[30,0]]') == '[[10,1],[30,0]]'

    def test_large_values_become_float(self):
        assert eval_math_expressions('(10 ** 20 * 1.0)') == 1e20

    def test_skip_keys_left_untouched(self):
        data = {'store_id': '1e3', 'ops': [{'store_id': '10', 'amount': '(2 * 3)'}]}
        result = eval_math_expressions(data, skip_keys=('store_id',))
        assert result['store_id'] == '1e3'
        assert result['ops'][0] == {'store_id': '10', 'amount': 6}

    def test_invalid_expression_kept(self, capsys):
        assert eval_math_expressions('(1 / 0)') == '(1 / 0)'
        assert 'Warning' in capsys.readouterr().out
