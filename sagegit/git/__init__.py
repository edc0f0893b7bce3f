"""The git service interface, argument validation and an in-memory backend."""