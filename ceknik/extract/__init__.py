"""
Extract Layer - I/O against the KPU voter-roll lookup

This layer handles all outbound traffic to the upstream endpoint.
- Single-attempt API client that classifies every failure
- Header construction and the ordered attempt ladder
- In-memory TTL cache for lookup results
"""
