import random
import typing


NodeType = typing.TypeVar("NodeType")


class WeightedGraph (typing.Generic[NodeType]):

	"""
	A directed graph of transition counts between nodes.
	"""

	def __init__ (self) -> None:

		"""
		Initialize an empty graph.
		"""

		self._edges: typing.Dict[NodeType, typing.Dict[NodeType, int]] = {}


	@classmethod
	def from_sequences (cls, sequences: typing.Iterable[typing.Sequence[NodeType]]) -> "WeightedGraph[NodeType]":

		"""
		Count every adjacent pair in each sequence as one transition.
		"""

		graph: "WeightedGraph[NodeType]" = cls()

		for sequence in sequences:
			for source, target in zip(sequence, sequence[1:]):
				graph.add_transition(source, target)

		return graph


	def add_transition (self, source: NodeType, target: NodeType, weight: int = 1) -> None:

		"""
		Add weight to the edge between two nodes, creating it if needed.
		"""

		if weight <= 0:
			raise ValueError("Weight must be positive")

		targets = self._edges.setdefault(source, {})
		targets[target] = targets.get(target, 0) + weight


	def get_transitions (self, source: NodeType) -> typing.List[typing.Tuple[NodeType, int]]:

		"""
		Return ``(target, weight)`` pairs in the order edges were first added.
		"""

		return list(self._edges.get(source, {}).items())


	def probabilities (self, source: NodeType) -> typing.List[typing.Tuple[NodeType, float]]:

		"""Return outgoing transitions normalised to probabilities.

		Sorted by descending probability. Ties keep first-seen order.
		"""

		options = self.get_transitions(source)
		total = sum(weight for _, weight in options)

		if total == 0:
			return []

		ranked = [(target, weight / total) for target, weight in options]
		ranked.sort(key=lambda item: item[1], reverse=True)

		return ranked


	def choose_next (self, source: NodeType, rng: random.Random) -> NodeType:

		"""
		Choose the next node using the edge weights; stay put when there are no edges.
		"""

		options = self.get_transitions(source)

		if not options:
			return source

		targets = [target for target, _ in options]
		weights = [weight for _, weight in options]

		return rng.choices(targets, weights=weights, k=1)[0]
