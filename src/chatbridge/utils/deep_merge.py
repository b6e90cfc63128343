from typing import Dict

def deep_merge(dict1: Dict, dict2: Dict) -> Dict:
    """Deep merges dict2 into a copy of dict1. Values from dict2 win."""
    merged = dict(dict1)
    for key, value in dict2.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged
