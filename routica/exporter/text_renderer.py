NONE = "none"


def _joined(names):
    return ", ".join(names) or NONE


def render_route(route) -> str:
    return "\n".join([
        f"{route.method} {route.path}",
        f"  Middlewares: {_joined(route.middleware)}",
        f"  Parameters: {_joined(route.params)}",
    ])


def render_text(result) -> str:
    blocks = [render_route(r) for r in result.routes]
    blocks.append(f"Total routes: {len(result.routes)}")
    return "\n\n".join(blocks)
