"""Default README template."""

README_TEMPLATE = """# {{name}}

{{description}}

## Contents

1. [Documentation](#documentation)
2. [Changelog](#changelog)
3. [Support](#support)
4. [Hooks](#hooks)

## Documentation

No documentation available.

## Changelog

Changelog not available.

## Support

Support not available.

## Hooks

List of currently used hooks:

    'sample' => '{{name}}::hooks.sample'
"""


def render_readme(name: str, description: str, template: str = README_TEMPLATE) -> str:
    """Substitute ``{{name}}`` and ``{{description}}`` into the template."""
    return template.replace("{{name}}", name).replace("{{description}}", description)
