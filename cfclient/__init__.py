"""Client library for the Cloud Foundry Cloud Controller API: spaces, quotas, services, users, stacks and tasks."""

__version__ = "0.1.0"