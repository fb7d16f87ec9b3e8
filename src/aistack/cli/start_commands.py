"""CLI command for starting the stack."""

import click

from aistack.stack.profiles import AUTO_GPU, PROFILE_REQUESTS

from .common import CONTEXT_SETTINGS, console, fail_unknown_target, get_manager, print_urls

START_TARGETS = ["all", "ai", "supabase", "gpu"]


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument("target", default="all")
@click.option(
    "-p",
    "--profile",
    type=click.Choice(PROFILE_REQUESTS),
    default="cpu",
    show_default=True,
    help="AI stack profile.",
)
@click.option("-c", "--cloudflare", is_flag=True, help="Enable the Cloudflare tunnel.")
@click.pass_context
def start(ctx, target, profile, cloudflare):
    """Start the AI stack and/or Supabase.

    TARGET is one of: all (default), ai, supabase, gpu. The gpu target
    starts everything with an auto-detected GPU profile.

    \b
    Examples:
      aistack start                   # everything, CPU profile
      aistack start ai -p gpu-nvidia  # AI stack on NVIDIA
      aistack start gpu               # auto-detect the GPU
      aistack start -c                # with the Cloudflare tunnel
    """
    if target not in START_TARGETS:
        fail_unknown_target(target, START_TARGETS)

    if target == "gpu":
        target = "all"
        profile = AUTO_GPU

    manager = get_manager(ctx)
    reporter = manager.reporter

    try:
        console.print()
        reporter.emit("header", "Local AI Stack")
        console.print()

        reporter.emit("info", "Running pre-flight checks...")
        failed = [c for c in manager.preflight() if not c.passed]
        for check in failed:
            reporter.emit("error", check.message)
        if failed:
            reporter.emit("warning", "Start Docker and copy .env.example to .env, then try again")
            raise SystemExit(1)
        reporter.emit("success", "Pre-flight checks passed")
        console.print()

        if target == "all":
            reporter.emit("info", "Target: Both AI Stack + Supabase")
        elif target == "ai":
            reporter.emit("info", f"Target: AI Stack only ({profile})")
        else:
            reporter.emit("info", "Target: Supabase only")
        if cloudflare and target != "supabase":
            reporter.emit("info", "Cloudflare: Enabled")
        console.print()

        ai_ok = True
        supabase_ok = True
        if target in ("all", "ai"):
            ai_ok = manager.start_ai(profile, cloudflare)
            console.print()
        if target == "supabase" or (target == "all" and ai_ok):
            supabase_ok = manager.start_supabase()
    except KeyboardInterrupt:
        console.print()
        reporter.emit("warning", "Startup interrupted")
        raise SystemExit(0)

    console.print()
    if not (ai_ok and supabase_ok):
        reporter.emit("error", "Some services failed to start")
        raise SystemExit(1)

    reporter.emit("success", "Stack is ready!")
    console.print()
    print_urls(target)
    reporter.emit("info", "Management commands:")
    console.print("  Stop:   🛑 aistack stop")
    console.print("  Status: 📊 aistack status")
    console.print("  Logs:   📦 aistack logs")
    console.print("  URLs:   🌐 aistack urls")
