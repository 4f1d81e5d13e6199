# social_feed/cli.py
from typing import Optional

import typer

from social_feed.db import get_session, init_db
from social_feed.errors import ServiceError
from social_feed.models import ActivityType
from social_feed.services import seeder
from social_feed.services.activity import list_user_activity
from social_feed.services.feed import get_feed

app = typer.Typer(help="Social Feed CLI with subcommands")


@app.command("init-db")
def init_db_cmd():
    """Create all tables in the configured database."""
    init_db()
    typer.echo("✓ Database schema created")


@app.command("seed")
def seed_cmd(
    users: int = typer.Option(50, help="Number of users"),
    posts: int = typer.Option(500, help="Number of posts"),
    hashtags: int = typer.Option(30, help="Number of unique hashtags"),
    follows: int = typer.Option(10, help="Maximum follows per user"),
    likes: int = typer.Option(20, help="Maximum likes per user"),
):
    """Populate the database with mock data (activity rows included)."""
    # Set deterministic seeds for reproducible data
    seeder.seed_random_generators()
    init_db()

    with get_session() as db:
        us = seeder.make_users(db, users)
        tags = seeder.make_hashtag_pool(hashtags)
        post_ids = seeder.make_posts(db, us, tags, posts)
        n_follows = seeder.make_follows(db, us, max_per_user=follows)
        n_likes = seeder.make_likes(db, us, post_ids, max_per_user=likes)
    typer.echo(
        f"Seed complete: users={users}, posts={posts}, hashtags={hashtags}, "
        f"follows={n_follows}, likes={n_likes}"
    )
    typer.echo(f"Every seeded account uses the password '{seeder.DEFAULT_PASSWORD}'")


@app.command("feed")
def feed_cmd(
    user_id: int = typer.Argument(..., help="User whose feed to show", min=1),
    limit: int = typer.Option(10, "--limit", "-l", help="Posts per page (1-100)", min=1, max=100),
    offset: int = typer.Option(0, "--offset", "-o", help="Posts to skip", min=0),
):
    """Show a user's home feed."""
    try:
        with get_session() as db:
            page = get_feed(db, user_id, limit=limit, offset=offset)

        if not page.items:
            typer.echo(f"No posts in the feed of user {user_id}")
            return

        typer.echo(f"\n📰 Feed for user {user_id} ({offset + 1}-{offset + len(page.items)} of {page.total}):")
        typer.echo("─" * 60)
        for post in page.items:
            author = f"{post['user']['first_name']} {post['user']['last_name']}"
            tags = " ".join(f"#{t}" for t in post["hashtags"])
            typer.echo(f"[{post['id']}] {author} · {post['created_at']:%Y-%m-%d %H:%M} · ♥ {post['like_count']}")
            typer.echo(f"    {post['content']}")
            if tags:
                typer.echo(f"    {tags}")

    except Exception as e:
        typer.echo(f"❌ Error loading feed: {e}", err=True)
        raise typer.Exit(1)


@app.command("activity")
def activity_cmd(
    user_id: int = typer.Argument(..., help="User whose activity to show", min=1),
    activity_type: Optional[ActivityType] = typer.Option(None, "--type", "-t", help="Only this activity type"),
    limit: int = typer.Option(10, "--limit", "-l", help="Rows per page (1-100)", min=1, max=100),
    offset: int = typer.Option(0, "--offset", "-o", help="Rows to skip", min=0),
):
    """Show a user's enriched activity history."""
    try:
        with get_session() as db:
            page = list_user_activity(db, user_id, limit=limit, offset=offset, activity_type=activity_type)

        if not page.items:
            typer.echo(f"No activity recorded for user {user_id}")
            return

        typer.echo(f"\n📜 Activity for user {user_id} ({len(page.items)} of {page.total}):")
        typer.echo("─" * 60)
        for entry in page.items:
            typer.echo(f"{entry.created_at:%Y-%m-%d %H:%M}  {entry.type.value:<14} {_describe(entry.detail)}")

    except ServiceError as e:
        typer.echo(f"❌ {e.message}", err=True)
        raise typer.Exit(1)
    except Exception as e:
        typer.echo(f"❌ Error loading activity: {e}", err=True)
        raise typer.Exit(1)


def _describe(detail: dict) -> str:
    if "post" in detail:
        return f"post #{detail['post']['id']}: {detail['post']['content'][:40]}"
    if "like" in detail:
        return f"liked post #{detail['like']['post_id']}"
    if "follow" in detail:
        followed = detail["follow"].get("followed")
        return f"followed {followed['email']}" if followed else f"followed user #{detail['follow']['followed_id']}"
    if "followed" in detail:
        return f"unfollowed {detail['followed']['email']}"
    return "(no longer available)"


if __name__ == "__main__":
    app()
