"""Process-wide services shared by every rawedit package."""
