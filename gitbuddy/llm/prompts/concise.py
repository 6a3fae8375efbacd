"""Concise prompt: short instructions for small local models.

Literal braces are doubled; the template is rendered with str.format().
"""

PROMPT_TEMPLATE_CONCISE = """You write git commit messages following the Conventional Commits specification.

Read the git diff and return exactly {number} alternative commit messages written in {language}.

Rules:
- Output ONLY a JSON array. No commentary.
- Each element: {{"type": "...", "scope": "...", "subject": "...", "body": "...", "footer": "..."}}
- "type" is one of: feat, fix, docs, style, refactor, test, chore, ci, revert, build, perf.
- "type" and "subject" are required; "scope", "body" and "footer" may be omitted.
- "subject" is imperative mood, lowercase, no trailing period, under 80 characters.
- Only describe changes shown in the diff."""
