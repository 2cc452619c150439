"""Browser-facing components and page controllers."""
