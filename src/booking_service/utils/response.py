from typing import Any, Dict
import decimal


def json_safe(obj):
    if isinstance(obj, dict):
        return {k: json_safe(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [json_safe(v) for v in obj]
    elif isinstance(obj, decimal.Decimal):
        return int(obj) if obj == obj.to_integral_value() else float(obj)
    else:
        return obj


def format_response(
    message: str,
    data: Any = None,
    success: bool = True
) -> Dict[str, Any]:
    return {
        "success": success,
        "message": message,
        "data": json_safe(data)
    }
