from __future__ import annotations

from flask import Blueprint, jsonify, request

from styleforge.calc import CalcChain, parse_calc
from styleforge.errors import InvalidCalcOperands
from styleforge.web.routes.assets import run_build

api_bp = Blueprint("api", __name__)


@api_bp.route("/exports")
def exports():
    """Return the generated name map of every definition file."""
    result = run_build()
    return jsonify({"exports": result.exports, "rule_count": result.rule_count})


@api_bp.route("/calc")
def canonical_calc():
    """Parse ``expr`` and return its canonical calc() rendering."""
    expr = request.args.get("expr", "")
    if not expr.strip():
        return jsonify({"error": "expr required"}), 400
    try:
        node = parse_calc(expr)
    except InvalidCalcOperands as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify({"expr": expr, "calc": str(CalcChain(node))})
