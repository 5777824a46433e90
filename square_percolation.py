import numpy as np


class InvalidSize(ValueError):
    """Raised when a grid is requested with a side length below 1."""


class OutOfRange(IndexError):
    """Raised when a (row, col) pair falls outside [1, n] x [1, n]."""


# weighted quick union-find over an arena of sites
class SiteUnionFind:
    """
    A Weighted Quick-Union-Find data structure with path splitting that
    also carries a per-site "full" flag.

    Sites are plain integer ids into parallel arrays. Ids listed in
    'sentinels' are virtual sites: they always win a union, so they stay
    the root of whatever they are merged with.
    """

    def __init__(self, n, sentinels=()):
        """
        Initializes 'n' sites indexed 0 through n-1, each its own root.

        :param n: The number of sites (grid sites plus sentinels).
        :param sentinels: Ids of the virtual sites.
        """
        if n <= 0:
            raise ValueError("n must be > 0")

        # self.parent[i] = parent of site i
        self.parent = list(range(n))

        # self.size[i] = number of sites in the tree rooted at i
        self.size = [1] * n

        # self.full[i] = site i is known to reach the top
        self.full = np.zeros(n, dtype=bool)

        self.sentinels = frozenset(sentinels)

    def _validate(self, p):
        n = len(self.parent)
        if p < 0 or p >= n:
            raise IndexError(f"index {p} is not between 0 and {n-1}")

    def find(self, p):
        """
        Returns the root of the set containing site 'p'.

        Every node walked through is re-pointed at its grandparent, and the
        walk continues from its old parent.
        """
        self._validate(p)

        while True:
            parent = self.parent[p]
            if parent == self.parent[parent]:
                return parent
            self.parent[p] = self.parent[parent]
            p = parent

    def connected(self, p, q):
        """
        Returns true if the two sites 'p' and 'q' are in the same component.
        """
        return self.find(p) == self.find(q)

    def union(self, p, q):
        """
        Merges the set containing site 'p' with the set containing site 'q'.

        If either member is full, both current roots are marked full before
        they are linked.
        """
        shouldFill = self.full[p] or self.full[q]

        rootP = self.find(p)
        rootQ = self.find(q)

        if shouldFill:
            self.full[rootP] = True
            self.full[rootQ] = True

        if rootP == rootQ:
            return

        # sentinels are always the attachment target; rootP wins a tie
        if rootP in self.sentinels:
            self._attach(rootQ, rootP)
        elif rootQ in self.sentinels:
            self._attach(rootP, rootQ)
        elif self.size[rootP] > self.size[rootQ]:
            self._attach(rootQ, rootP)
        else:
            self._attach(rootP, rootQ)

    def _attach(self, child, parent):
        self.size[parent] += self.size[child]
        self.parent[child] = parent


class ConnectivityGrid:
    # create a n by n grid with all sites blocked
    def __init__(self, n: int):
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 1:
            raise InvalidSize("n must be a positive integer")

        self.gridSize = int(n)
        self.gridSquare = self.gridSize * self.gridSize

        self.virtualTop = self.gridSquare
        self.virtualBottom = self.gridSquare + 1

        self.uf = SiteUnionFind(self.gridSquare + 2, sentinels=(self.virtualTop, self.virtualBottom))

        self.openFlags = np.zeros(self.gridSquare + 2, dtype=bool)

        # both virtual sites start open and full
        for virtual in (self.virtualTop, self.virtualBottom):
            self.openFlags[virtual] = True
            self.uf.full[virtual] = True

        self.openSite = 0

    # open the site[i,j] if it's not open yet
    def open(self, row: int, col: int):
        self.validState(row, col)

        flatIndex = self.flattenGrid(row, col)

        if self.openFlags[flatIndex]:
            return

        self.openFlags[flatIndex] = True
        self.openSite += 1

        # connect to open neighbours: up, down, left, right
        for neighbour in self.neighbours(row, col):
            if self.openFlags[neighbour]:
                self.uf.union(neighbour, flatIndex)

    # is site[i,j] open?
    def isOpen(self, row: int, col: int) -> bool:
        self.validState(row, col)
        return bool(self.openFlags[self.flattenGrid(row, col)])

    # is site[i,j] full?
    def isFull(self, row: int, col: int) -> bool:
        self.validState(row, col)
        return bool(self.uf.full[self.flattenGrid(row, col)])

    def numberOfOpenSites(self) -> int:
        return self.openSite

    def percolates(self) -> bool:
        return self.uf.connected(self.virtualTop, self.virtualBottom)

    def neighbours(self, row: int, col: int):
        """
        Returns the site ids around (row, col) in the order up, down, left,
        right. Row 1 looks up into the virtual top, row n looks down into the
        virtual bottom. Columns do not wrap.
        """
        results = []

        if row == 1:
            results.append(self.virtualTop)
        else:
            results.append(self.flattenGrid(row - 1, col))

        if row == self.gridSize:
            results.append(self.virtualBottom)
        else:
            results.append(self.flattenGrid(row + 1, col))

        if col > 1:
            results.append(self.flattenGrid(row, col - 1))
        if col < self.gridSize:
            results.append(self.flattenGrid(row, col + 1))

        return results

    def validState(self, row: int, col: int):
        if not self.isOnGrid(row, col):
            raise OutOfRange(f"site ({row}, {col}) is outside [1, {self.gridSize}] x [1, {self.gridSize}]")

    def flattenGrid(self, row: int, col: int) -> int:
        return self.gridSize * (row - 1) + (col - 1)

    def isOnGrid(self, row: int, col: int) -> bool:
        return 1 <= row <= self.gridSize and 1 <= col <= self.gridSize
