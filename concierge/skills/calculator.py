import logging

from concierge.core import mathexpr
from concierge.core.contracts import Query, ResolverResult
from concierge.core.errors import ArithmeticParseError
from concierge.skills.base import Resolver

logger = logging.getLogger("calculator_skill")

CANNOT_CALCULATE = "Sorry, I could not calculate that."


class CalculatorSkill(Resolver):
    name = "math"

    async def resolve(self, query: Query) -> ResolverResult:
        expression = mathexpr.extract_expression(query.text)
        if not expression:
            logger.info("CalculatorSkill: No expression in '%s'", query.text)
            return ResolverResult.declined(CANNOT_CALCULATE)

        try:
            value = mathexpr.evaluate(expression)
        except ArithmeticParseError as e:
            logger.info("CalculatorSkill: %s", e)
            return ResolverResult.declined(CANNOT_CALCULATE)

        return ResolverResult.ok(f"{expression} = {mathexpr.format_number(value)}")
