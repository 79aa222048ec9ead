"""
Role feature module.

Roles are reference data: users point at a role by identifier, but this
service never creates or destroys roles on a user's behalf.
"""
