from hlsrec.session.session import DEFAULT_USER_AGENT, RecorderSession


__all__ = ["DEFAULT_USER_AGENT", "RecorderSession"]
