"""
Services Layer
Read-only collaborators and aggregations used by the lifecycle engine.

Services should:
- Not modify core data models or business logic
- Read from multiple data models to aggregate information
- Be stateless where possible

Organization:
- core/ : Entity stores (get / find / list / exists) over the reference data
- dashboard/ : MetricsAggregator and its filters and result structs
"""
