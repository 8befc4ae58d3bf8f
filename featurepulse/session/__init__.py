from featurepulse.session.session_tracker import SessionTracker

__all__ = ["SessionTracker"]
