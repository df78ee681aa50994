from typing import Callable, List, TypeVar

N = TypeVar("N")  # Node
L = TypeVar("L")  # Leaf, i.e. an input token
T = TypeVar("T", bound=str)  # Terminal name
NT = TypeVar("NT", bound=str)  # Non-terminal name

# Maps an input token to the name of the terminal it represents
Classifier = Callable[[L], T]
# Builds a node from the children matched for a non-terminal
Factory = Callable[[List[N | L]], N]
