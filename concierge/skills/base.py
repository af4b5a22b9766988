from concierge.core.contracts import Query, ResolverResult


class Resolver:
    """A skill that answers one kind of query. Must not raise for capability failures."""

    name: str = ""

    async def resolve(self, query: Query) -> ResolverResult:
        raise NotImplementedError
