import asyncio, logging
import typer
from rich.console import Console
from rich.logging import RichHandler

from ..adapters.rpc_httpx import HttpxLogSource
from ..adapters.state_json import JSONStateStore
from ..application.config import DEFAULT_RPC_URL, DEFAULT_STATE_PATH, SyncConfig
from ..application.sync import SyncEngine, run_sync
from ..domain.errors import PropsyncError
from ..domain.value_types import GENESIS_BLOCK, GOVERNANCE_ADDRESS, PROPOSAL_CREATED_TOPIC

app = typer.Typer(help="Incremental sync of governance proposal logs.", no_args_is_help=True)
console = Console()
err_console = Console(stderr=True)

RpcUrl = typer.Option(DEFAULT_RPC_URL, "--rpc-url", envvar="PROPSYNC_RPC_URL", help="JSON-RPC endpoint")
StatePath = typer.Option(DEFAULT_STATE_PATH, "--state-path", envvar="PROPSYNC_STATE_PATH", help="State JSON file")
Verbose = typer.Option(False, "--verbose", "-v", help="Debug logging")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


async def _sync(config: SyncConfig) -> int:
    engine = SyncEngine(config)
    store = JSONStateStore(config.state_path, config.genesis_block)
    async with HttpxLogSource(config.rpc_url) as source:
        res = await run_sync(engine, source, store)
    return res.new_count


@app.command()
def sync(
    rpc_url: str = RpcUrl,
    state_path: str = StatePath,
    contract: str = typer.Option(GOVERNANCE_ADDRESS, help="Governance contract address"),
    topic: str = typer.Option(PROPOSAL_CREATED_TOPIC, help="Event topic0"),
    genesis_block: int = typer.Option(GENESIS_BLOCK, help="First block when no state exists"),
    verbose: bool = Verbose,
):
    """Run one sync pass and report how many new proposals were found."""
    _setup_logging(verbose)
    config = SyncConfig(
        rpc_url=rpc_url, contract_address=contract, event_topic=topic,
        genesis_block=genesis_block, state_path=state_path,
    )
    try:
        n = asyncio.run(_sync(config))
    except PropsyncError as e:
        err_console.print(f"[bold red]error[/]: {e}")
        raise typer.Exit(code=1)
    console.print(f"Discovered and wrote {n} proposals")


@app.command()
def show(
    state_path: str = StatePath,
    genesis_block: int = typer.Option(GENESIS_BLOCK, help="First block when no state exists"),
    verbose: bool = Verbose,
):
    """Print the stored checkpoint without touching the network."""
    _setup_logging(verbose)
    store = JSONStateStore(state_path, genesis_block)
    try:
        state = asyncio.run(store.load())
    except PropsyncError as e:
        err_console.print(f"[bold red]error[/]: {e}")
        raise typer.Exit(code=1)
    console.print(f"[bold]block[/]={state.block}  [bold]logs[/]={len(state.logs)}")


if __name__ == "__main__":
    app()
