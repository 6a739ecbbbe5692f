"""Union-Find / Disjoint Set Union over vertices 0..n-1 with path compression and union-by-size."""
from typing import Dict, List


class DSU:
    def __init__(self, n: int):
        if n < 0:
            raise ValueError(f"DSU size must be non-negative, got {n}")
        # parent and size are flat lists indexed by vertex id
        self.parent: List[int] = list(range(n))
        self.size: List[int] = [1] * n
        self.count = n

    def __len__(self) -> int:
        return len(self.parent)

    def _validate(self, x: int) -> None:
        if not 0 <= x < len(self.parent):
            raise IndexError(f"index {x} is not between 0 and {len(self.parent) - 1}")

    def find(self, x: int) -> int:
        self._validate(x)
        # path compression; union-by-size keeps the depth under log2(n)
        if self.parent[x] != x:
            self.parent[x] = self.find(self.parent[x])
        return self.parent[x]

    def union(self, x: int, y: int) -> bool:
        xroot = self.find(x)
        yroot = self.find(y)
        if xroot == yroot:
            return False
        # union by size, ties hang y's root under x's root
        if self.size[xroot] < self.size[yroot]:
            self.parent[xroot] = yroot
            self.size[yroot] += self.size[xroot]
        else:
            self.parent[yroot] = xroot
            self.size[xroot] += self.size[yroot]
        self.count -= 1
        return True

    def connected(self, x: int, y: int) -> bool:
        return self.find(x) == self.find(y)

    def component_size(self, x: int) -> int:
        return self.size[self.find(x)]

    def components(self) -> Dict[int, List[int]]:
        """Return mapping root -> [members] in increasing member order."""
        comp: Dict[int, List[int]] = {}
        for v in range(len(self.parent)):
            comp.setdefault(self.find(v), []).append(v)
        return comp

    def num_components(self) -> int:
        return self.count
