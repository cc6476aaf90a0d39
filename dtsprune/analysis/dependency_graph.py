from __future__ import annotations
from typing import FrozenSet, Iterable, List, Mapping
import networkx as nx

def build_module_graph(deps: Mapping[str, Iterable[str]]) -> nx.DiGraph:
    """Edge u -> v means module u imports module v."""
    G = nx.DiGraph()
    for name, required in deps.items():
        G.add_node(name)
        for dep in required:
            G.add_edge(name, dep)
    return G

def reachable_names(deps: Mapping[str, Iterable[str]], roots: Iterable[str], graph: nx.DiGraph | None = None) -> FrozenSet[str]:
    """
    Roots plus everything they transitively import.

    Names that no block declares still count as reachable; they just have no
    outgoing edges.
    """
    G = graph if graph is not None else build_module_graph(deps)
    reached: set[str] = set()
    for root in roots:
        if root in reached:
            continue
        reached.add(root)
        if root in G:
            reached.update(nx.descendants(G, root))
    return frozenset(reached)

def find_cycles(G: nx.DiGraph, limit: int = 10) -> List[List[str]]:
    cycles: List[List[str]] = []
    for cycle in nx.simple_cycles(G):
        cycles.append([str(n) for n in cycle])
        if len(cycles) >= limit:
            break
    return cycles
