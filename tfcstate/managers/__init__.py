"""Operations behind the CLI commands.

Each module provides async functions that sequence store and API calls.
Managers accept their collaborators (stores, ``TfcClient``) as parameters
and raise ``tfcstate.errors`` exceptions, never click exceptions -- that
translation is the CLI's responsibility.
"""
