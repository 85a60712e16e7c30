"""Application layer: DTOs, ports, services, and task use cases.

Depends only on domain and protocol definitions. Infrastructure implements
the interfaces (repositories, permission resolver, cache).
"""
