"""
conftest.py
-----------
Shared pytest fixtures for Marginalia tests.

Provides fixtures for:
- Sample essay content (valid and broken)
- A small on-disk corpus, including the duplicated Y-combinator article
"""
import pytest
from pathlib import Path


PNG_BYTES = b"\x89PNG\r\n\x1a\n"


def write_document(directory: Path, name: str, content: str) -> Path:
    """Write a document under directory, creating parent folders."""
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


# ----- Sample Content Fixtures -----

@pytest.fixture
def valid_essay_content():
    """Essay exercising every body feature, with no issues."""
    return """---
title: Tidy Processes in Python
tags:
  - python
  - processes
date: 2021-05-10
updatedAt: 2021-06-01
---

Child processes outlive their parents unless you clean them up.[^1]

```python
with tidy_process(["sleep", "10"]) as proc:
    proc.wait()
```

$$
T(n) = 2T(n/2) + n
$$

![Process tree](img/tree.png)

[^1]: Zombies, orphans and friends.
"""


@pytest.fixture
def react_essay_content():
    """MDX essay with JSX samples and a highlighted-lines fence."""
    return """---
title: Compound Components
tags: [react, patterns]
publishedAt: "2020-02-14"
---

A checkbox that knows its label:

```jsx {2}
function Checkbox({ checked, onChange }) {
  return <input type="checkbox" checked={checked} onChange={onChange} />;
}
```
"""


@pytest.fixture
def y_combinator_content():
    """First version of the duplicated article."""
    return """---
title: Inventing the Y-Combinator
tags: [lambda-calculus, javascript]
date: 2019-07-02
editedAt: 2019-08-01
---

We want recursion without naming the function.

```javascript
const Y = f => (x => x(x))(x => f(y => x(x)(y)));
```
"""


@pytest.fixture
def y_combinator_v2_content():
    """Second, diverging version of the duplicated article."""
    return """---
title: Inventing the  Y-combinator
tags: [javascript]
date: 2019-07-02
updatedAt: 2020-01-15
---

We want recursion without naming the function.

```js
const Y = f => (x => x(x))(x => f(y => x(x)(y)));
```
"""


# ----- Corpus Fixtures -----

@pytest.fixture
def valid_essay_file(tmp_path, valid_essay_content):
    """Valid essay on disk, with its image."""
    (tmp_path / "img").mkdir()
    (tmp_path / "img" / "tree.png").write_bytes(PNG_BYTES)
    return write_document(tmp_path, "tidy-processes.md", valid_essay_content)


@pytest.fixture
def corpus_dir(
    tmp_path,
    valid_essay_content,
    react_essay_content,
    y_combinator_content,
    y_combinator_v2_content,
):
    """Content directory with four essays, two of them sharing a title."""
    content = tmp_path / "content"
    (content / "img").mkdir(parents=True)
    (content / "img" / "tree.png").write_bytes(PNG_BYTES)
    write_document(content, "tidy-processes.md", valid_essay_content)
    write_document(content, "react/compound-components.mdx", react_essay_content)
    write_document(content, "y-combinator.md", y_combinator_content)
    write_document(content, "y-combinator-v2.md", y_combinator_v2_content)
    return content


@pytest.fixture
def make_document(tmp_path):
    """Factory writing a document into tmp_path and returning its path."""
    def _make(name: str, content: str) -> Path:
        return write_document(tmp_path, name, content)
    return _make
