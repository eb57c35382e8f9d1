"""sshmux - SSH connections inside persistent tmux sessions

Philosophy:
- Ruthless simplicity
- Brick architecture (self-contained modules)
- No secrets handled here (connection commands only)
- Fail fast with helpful guidance

The sshmux CLI opens one tmux session per server, or one session per profile
with a window per server, and finds those sessions again on the next run.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
