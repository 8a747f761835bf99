"""Browser process, page and locator handling."""
