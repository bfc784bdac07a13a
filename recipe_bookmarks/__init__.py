"""Recipe Bookmarks API - recipe metadata extraction for saved links."""
