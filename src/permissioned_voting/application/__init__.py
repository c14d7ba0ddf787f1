"""
Application Layer

Orchestrates the voting aggregate, its persistence and the audit log.

Structure:
- services/: VotingApplicationService, the serialised write path
- queries/: Read operations (GetResultsQuery, GetAuditTrailQuery)
"""
