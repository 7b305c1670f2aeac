from typing import Any
import math
import re

# Namespace ammesso nelle espressioni "(...)" degli scenari YAML
SAFE_MATH_NAMES = {
    'abs': abs,
    'int': int,
    'float': float,
    'min': min,
    'max': max,
    'pow': pow,
    'pi': math.pi,
    'e': math.e
}

MATH_EXPRESSION_PATTERN = r'\(([a-zA-Z0-9+\-*/.() ]+)\)'


def get_nested(data: dict, path: str, default: Any) -> Any:
    """
    Naviga un dict con dot notation.

    Args:
        data: Dizionario da navigare
        path: Percorso in dot notation (es. 'settings.on_error')
        default: Valore di default se il percorso non esiste

    Returns:
        Valore trovato o default
    """
    keys = path.split('.')
    current = data

    for key in keys:
        if isinstance(current, dict) and key in current:
            current = current[key]
        else:
            return default

    return current


def eval_math_expressions(obj, skip_keys=()):
    """
    Valuta espressioni matematiche nei valori YAML.

    Riconosce pattern "(espressione)" e valuta l'espressione in un
    namespace ristretto (SAFE_MATH_NAMES, nessun builtin).

    Args:
        obj: oggetto da preprocessare (dict, list, str, number)
        skip_keys: chiavi dei dict i cui valori restano invariati
                   (es. identificativi come 'store_id')

    Examples:
        "(10 + 5)"    → 15
        "(pi * 2)"    → 6.283...
        "(max(3, 7))" → 7
        "abc"         → "abc"
    """
    if isinstance(obj, dict):
        return {
            k: v if k in skip_keys else eval_math_expressions(v, skip_keys)
            for k, v in obj.items()
        }

    elif isinstance(obj, list):
        return [eval_math_expressions(item, skip_keys) for item in obj]

    elif isinstance(obj, str):
        def evaluate_match(match):
            expr = match.group(1)
            try:
                result = eval(expr, {"__builtins__": {}}, SAFE_MATH_NAMES)
                return repr(result)
            except Exception as e:
                print(f"⚠️  Warning: impossibile valutare '{expr}': {e}")
                return match.group(0)

        evaluated = re.sub(MATH_EXPRESSION_PATTERN, evaluate_match, obj)

        # Converti in numero se possibile
        try:
            return float(evaluated) if '.' in evaluated or 'e' in evaluated else int(evaluated)
        except ValueError:
            return evaluated

    else:
        return obj
