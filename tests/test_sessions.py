from src.shortlinks.services.sessions import SessionIdentity


class TestSessionIdentity:
    def test_start_and_resolve(self):
        sessions = SessionIdentity()
        token = sessions.start_session("acc1")
        assert sessions.resolve(token) == "acc1"

    def test_tokens_are_distinct(self):
        sessions = SessionIdentity()
        first = sessions.start_session("acc1")
        second = sessions.start_session("acc1")
        assert first != second
        assert sessions.resolve(first) == sessions.resolve(second) == "acc1"

    def test_unknown_token(self):
        sessions = SessionIdentity()
        assert sessions.resolve("nope") is None
        assert sessions.resolve(None) is None

    def test_end_session(self):
        sessions = SessionIdentity()
        token = sessions.start_session("acc1")
        sessions.end_session(token)
        assert sessions.resolve(token) is None

    def test_end_session_is_idempotent(self):
        sessions = SessionIdentity()
        token = sessions.start_session("acc1")
        sessions.end_session(token)
        sessions.end_session(token)
        sessions.end_session("unknown")
        sessions.end_session(None)
        assert sessions.resolve(token) is None
