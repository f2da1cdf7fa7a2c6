"""Starter document shown to new users."""

from __future__ import annotations

DEFAULT_TITLE = "Markdown Muse"

_DEFAULT_CONTENT = f"""# Welcome to {DEFAULT_TITLE}

## A simple markdown editor

Write your content here using **markdown** syntax.

### Features:
- Real-time preview
- Basic formatting
- Local storage save
- Export to .md file

> Inspiration comes from simplicity

```
// Code blocks are supported too
function hello() {{
  console.log("Hello Markdown!");
}}
```

[Learn more about Markdown](https://www.markdownguide.org/)

Happy writing!
"""


def default_content() -> str:
    return _DEFAULT_CONTENT


__all__ = ["DEFAULT_TITLE", "default_content"]
