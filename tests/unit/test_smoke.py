"""Basic smoke tests for the package scaffolding."""

def test_imports():
    import api_server  # noqa: F401
    import certificates.issuer  # noqa: F401
    import course_progress.engine  # noqa: F401
    import interview_engine  # noqa: F401
    from config.settings import settings

    assert settings.DB_PATH.endswith(".db")
