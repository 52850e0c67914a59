"""
Text Rendering

Plain-text rendering of the users panel and the posts panel.
"""

from typing import List

from ..api.models import User
from ..config import config
from .state import DashboardState


SEPARATOR = "-" * 40


def format_address(user: User) -> str:
    if user.address is None:
        return config.dashboard.address_missing_text
    return user.address.format_line()


def format_company(user: User) -> str:
    if user.company is None:
        return config.dashboard.company_missing_text
    return user.company.name or ""


def render_users(state: DashboardState) -> str:
    lines: List[str] = ["Users", SEPARATOR]
    lines.append(f"Search: {state.query or '(none)'}    Sort: {state.sort_key}")

    if state.loading_users:
        lines.append("Loading users...")
    if state.users_error:
        lines.append(f"! {state.users_error}")

    for user in state.visible_users:
        marker = ">" if user.id == state.selected_user_id else " "
        lines.append(f"{marker} User ID: {user.id}")
        lines.append(f"  {user.name}")
        lines.append(f"  {user.email}")
        lines.append(f"  {format_address(user)}")
        lines.append(f"  {format_company(user)}")

    return "\n".join(lines)


def render_posts(state: DashboardState) -> str:
    lines: List[str] = ["Posts", SEPARATOR]

    if state.loading_posts:
        lines.append("Loading posts...")
    if state.posts_error:
        lines.append(f"! {state.posts_error}")

    selected = state.selected_user
    if selected is not None:
        lines.append(f"Showing posts for: {selected.name or ''}")

    if state.posts:
        for post in state.posts:
            lines.append("")
            lines.append(f"# {post.title}")
            lines.append(post.body)
    elif selected is not None:
        lines.append("No posts available.")
    else:
        lines.append("Select a user to see posts.")

    return "\n".join(lines)


def render_dashboard(state: DashboardState) -> str:
    """Render both panels, users first."""
    return f"{render_users(state)}\n\n{render_posts(state)}"
