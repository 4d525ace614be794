from poly.typecheck.types import TypeVariable


class InferState:
    """The supply of fresh type variable names for one inference.

    Every call that may need a fresh variable takes the state as an argument.
    Two inferences that use separate states produce the same names."""

    def __init__(self, count: int = 0) -> None:
        self.count = count

    def fresh(self) -> TypeVariable:
        self.count += 1
        return TypeVariable(f't{self.count}')

    def __repr__(self) -> str:
        return f'InferState({self.count!r})'
