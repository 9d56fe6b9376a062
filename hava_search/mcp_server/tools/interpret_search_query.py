"""interpret_search_query tool implementation."""

from __future__ import annotations

import json
from typing import Any

from hava_search.core.query_engine import QueryInterpreter


def interpret_search_query(interpreter: QueryInterpreter, query: str, trace=None) -> dict[str, Any]:
    interpreted = interpreter.interpret(query, trace=trace)
    payload = interpreted.to_dict()
    return {
        "content": [{"type": "text", "text": json.dumps(payload, ensure_ascii=False)}],
        "structuredContent": payload,
    }
