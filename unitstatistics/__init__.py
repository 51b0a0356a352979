"""Unit membership statistics, dashboard figures and statistics export."""
