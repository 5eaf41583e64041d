"""
Games - Concrete rule catalogs and their collaborators.

Each game ships a rule catalog, the vocabularies its rules read,
and the providers that produce its session context.
"""
