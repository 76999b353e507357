"""
The `database` package holds everything the Artify server needs to reach its relational datastore.

Contents:
    - config:
        Environment-driven connection settings for every deployment
        environment, and the adapter that hands them to SQLAlchemy.
"""
