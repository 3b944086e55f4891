# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for table operations
# - slugs.py: Slug normalization for public profile links
# - embeds.py: Spotify/YouTube URL -> iframe resolver
# - theme.py: Background variants, gradient presets, colors
# - cards.py: Pillow rendering of wallet and schedule cards
# - debounce.py: Cancellable debounced task (slug checks)
# - profile_labels.py: Portuguese labels and display names
# - utils.py: Shared utilities (error base class, months, dates)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import ApplicationError

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Utils
    "ApplicationError",
]
