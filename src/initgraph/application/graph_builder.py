"""Application layer - Dependency graph construction."""

from typing import Dict, Iterable, List, Optional

from initgraph.domain import ComponentDeclaration, DependencyEdge, DependencyGraph


class DependencyGraphBuilder:
    """Converts component declarations into adjacency and in-degree counts.

    An edge ``B -> A`` is added when A declares B and B is itself declared.
    A dependency matching the external root name adds no edge; any other
    unknown dependency adds no edge either and is only recorded, so that it
    fails later when the dependent component is instantiated.
    """

    def build(
        self,
        declarations: Iterable[ComponentDeclaration],
        external_root: Optional[str] = None,
    ) -> DependencyGraph:
        """Build the dependency graph.

        Args:
            declarations: Declarations in registration order.
            external_root: Name that will be supplied at build time, if any.

        Returns:
            The dependency graph over the declared names.

        Example:
            >>> graph = DependencyGraphBuilder().build(store.declarations(), "party")
            >>> graph.dependents["audio"]
            ['combat']
        """
        ordered = list(declarations)
        declared = {declaration.name for declaration in ordered}

        nodes: List[str] = []
        dependencies: Dict[str, List[str]] = {}
        dependents: Dict[str, List[str]] = {}
        in_degree: Dict[str, int] = {}
        for declaration in ordered:
            nodes.append(declaration.name)
            dependencies[declaration.name] = list(declaration.dependencies)
            dependents[declaration.name] = []
            in_degree[declaration.name] = 0

        edges: List[DependencyEdge] = []
        unresolved: Dict[str, List[str]] = {}
        for declaration in ordered:
            for dependency in declaration.dependencies:
                if dependency in declared:
                    dependents[dependency].append(declaration.name)
                    in_degree[declaration.name] += 1
                    edges.append(DependencyEdge(source=dependency, target=declaration.name))
                elif dependency != external_root:
                    unresolved.setdefault(declaration.name, []).append(dependency)

        return DependencyGraph(
            nodes=nodes,
            dependencies=dependencies,
            dependents=dependents,
            in_degree=in_degree,
            edges=edges,
            external_root=external_root,
            unresolved=unresolved,
        )
