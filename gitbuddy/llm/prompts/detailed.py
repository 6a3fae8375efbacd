"""Detailed prompt: several Conventional Commits options as a JSON array.

Literal braces are doubled; the template is rendered with str.format().
"""

PROMPT_TEMPLATE_DETAILED = """
### Instructions
You are an expert software developer and master of Conventional Commits.
Generate {number} git commit messages based on the supplied git diff content. Every message must follow the Conventional Commits specification.

## Workflow
1. Analyze the content of the change according to the git diff context and summarize it.
2. Determine the type and scope based on the changes, and give the most likely types and scopes when multiple commit options are requested.
3. Format the output according to the constraints.

## Constraints (Must follow)
- language of subject and body: {language}
- number of commit messages: {number}
- output schema: The output must be a valid JSON array matching the schema below, without any other text. If number is 1, the output must be an array with one element.

### Schema
```json
{{
    "title": "Conventional Commits",
    "description": "Generate conventional commit messages",
    "type": "array",
    "items": {{
        "type": "object",
        "description": "Conventional commit message",
        "properties": {{
            "type": {{
                "type": "string",
                "description": "Type of current commit",
                "enum": ["feat", "fix", "docs", "style", "refactor", "test", "chore", "ci", "revert", "build", "perf"]
            }},
            "scope": {{
                "type": "string",
                "description": "Affected component, e.g. auth/view"
            }},
            "subject": {{
                "type": "string",
                "description": "Short summary of the change, must be in imperative mood and under 80 characters, e.g. add oauth2 authentication flow"
            }},
            "body": {{
                "type": "string",
                "description": "Detailed description of the change"
            }},
            "footer": {{
                "type": "string",
                "description": "Additional information, e.g., breaking changes"
            }}
        }},
        "required": ["type", "subject"]
    }},
    "minItems": {number},
    "maxItems": {number}
}}
```

The output must be a valid JSON array of commit messages without any other text.

## Example
```json
[
  {{
    "type": "feat",
    "scope": "auth",
    "subject": "add oauth2 authentication flow",
    "body": "implement secure authentication using OAuth2 protocol\\n- add login endpoint\\n- integrate with external providers\\n- handle token refresh",
    "footer": "BREAKING CHANGE: authentication header format changed"
  }}
]
```
"""
