"""Fantasy mountain bike race lifecycle and scoring."""
