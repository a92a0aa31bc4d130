"""
Orchestration Layer

- LookupOrchestrator: cache check, attempt ladder, hard deadline
- NikLookupService: NIK validation + decoding + remote lookup, JSON envelope
"""
