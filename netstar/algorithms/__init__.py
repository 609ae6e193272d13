"""Algorithms over a `CompactNetwork`.

Modules: `containers` and `heaps` (work containers), `search` (BFS/DFS),
`spf` (Dijkstra), and `pagerank` (rank propagation).
"""
