from copy import deepcopy


def deep_merge_dicts(a: dict, b: dict) -> dict:
    """Deep merge two dictionaries"""

    result = deepcopy(a)
    for bk, bv in b.items():
        av = result.get(bk)
        if isinstance(av, dict) and isinstance(bv, dict):
            result[bk] = deep_merge_dicts(av, bv)
        else:
            result[bk] = deepcopy(bv)
    return result
