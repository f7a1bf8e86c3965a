"""Users app package.

Defines the custom user model with admin, agent and customer roles, the
registration request review flow and password reset / activation codes.
Use ``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout the
project.
"""
