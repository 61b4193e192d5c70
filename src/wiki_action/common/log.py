from wiki_action.common.config import load_settings

def log(m): print(m, flush=True)

def debug(m):
    """Print only when settings.verbose is on; re-read on every call."""
    if load_settings().verbose:
        log(m)
