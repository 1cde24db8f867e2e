from dataclasses import dataclass, field


@dataclass
class _TrieNode:
    is_key: bool = False
    children: dict[str, "_TrieNode"] = field(default_factory=dict)


class TrieSet:
    """
    Set of strings supporting prefix queries (location-name autocomplete).
    Empty keys are never stored.
    """

    def __init__(self):
        self._root = _TrieNode()
        self._size = 0

    def clear(self) -> None:
        self._root = _TrieNode()
        self._size = 0

    def add(self, key: str | None) -> None:
        if not key:
            return
        node = self._root
        for c in key:
            node = node.children.setdefault(c, _TrieNode())
        if not node.is_key:
            node.is_key = True
            self._size += 1

    def contains(self, key: str | None) -> bool:
        if not key:
            return False
        node = self._find(key)
        return node is not None and node.is_key

    def keys_with_prefix(self, prefix: str | None) -> list[str]:
        if not prefix:
            return []
        node = self._find(prefix)
        if node is None:
            return []

        out: list[str] = []
        stack = [(prefix, node)]
        while stack:
            s, n = stack.pop()
            if n.is_key:
                out.append(s)
            for c in sorted(n.children, reverse=True):
                stack.append((s + c, n.children[c]))
        return out

    def longest_prefix_of(self, key: str | None) -> str:
        if not key:
            return ""
        node, best = self._root, 0
        for i, c in enumerate(key, start=1):
            node = node.children.get(c)
            if node is None:
                break
            if node.is_key:
                best = i
        return key[:best]

    def _find(self, s: str) -> _TrieNode | None:
        node = self._root
        for c in s:
            node = node.children.get(c)
            if node is None:
                return None
        return node

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def __len__(self) -> int:
        return self._size
