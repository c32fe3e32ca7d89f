"""Office presence package.

Feature modules (network, schedules, attendance, leaves, dashboard) each keep
the same split: domain model, repository interface, MySQL repository, service
and a thin Flask controller.
"""
