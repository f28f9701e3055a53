"""
plugins/commands/menu.py
------------------------
Lists the commands the caller is allowed to run, grouped by category.
"""

from itertools import groupby

from wabot_plugins.manager import plugin
from wabot_plugins.messages import MENU_EMPTY, MENU_HEADER


def format_menu(specs, prefix: str) -> str:
    if not specs:
        return MENU_EMPTY
    lines = [MENU_HEADER]
    ordered = sorted(specs, key=lambda s: (s.category, s.primary_alias))
    for category, group in groupby(ordered, key=lambda s: s.category):
        lines.append("")
        lines.append(f"*{category.upper()}*")
        for spec in group:
            extra = f" ({', '.join(prefix + a for a in spec.aliases[1:])})" if len(spec.aliases) > 1 else ""
            entry = f"  • {prefix}{spec.primary_alias}{extra}"
            if spec.description:
                entry += f" - {spec.description}"
            lines.append(entry)
    return "\n".join(lines)


@plugin(["menu", "help"], name="menu", category="core", description="List the commands you can use")
async def menu(ctx) -> str:
    return format_menu(await ctx.commands(), ctx.prefix)

# End of plugins/commands/menu.py
