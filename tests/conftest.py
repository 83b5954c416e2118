import json
import os
import sys
from pathlib import Path

import pytest

# Ensure repository root is on sys.path before importing project modules.
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from demosdk_docs_mcp.config import DocsConfig  # noqa: E402
from demosdk_docs_mcp.docs.builder import BuildResult  # noqa: E402
from demosdk_docs_mcp.docs.context import DocsContext  # noqa: E402
from demosdk_docs_mcp.docs.models import (  # noqa: E402
    ClassDoc,
    DocIndex,
    EnumDoc,
    FunctionDoc,
    InterfaceDoc,
    MethodDoc,
    ParameterDoc,
    PropertyDoc,
)
from demosdk_docs_mcp.metrics import default_metrics  # noqa: E402

DEMOS_CLASS_HTML = """<html>
<head><script>var banner = "<p>script paragraph</p>";</script><style>.x { color: red; }</style></head>
<body>
<div class="tsd-comment tsd-typography"><p>Main entry point for the Demos network &amp; SDK.</p></div>
<section class="tsd-panel tsd-member tsd-kind-method"><h3 class="tsd-anchor-link">connect</h3>
<div class="tsd-signature">connect(rpc: string): Promise&lt;boolean&gt;</div>
<div class="tsd-comment tsd-typography">Connects to an RPC node.</div>
</section>
<section class="tsd-panel tsd-member tsd-kind-method"><h3>confirm</h3>
<div class="tsd-signature">confirm(tx: Transaction): Promise&lt;RPCResponse&gt;</div>
<div class="tsd-comment">Confirms a transaction before broadcast.</div>
</section>
<div class="tsd-property"><h4>rpc_url</h4>: <span class="tsd-signature-type">string</span></div>
</body>
</html>
"""

WALLET_INTERFACE_HTML = """<html><body>
<div class="tsd-comment"><p>Wallet abstraction used by chain clients.</p></div>
<div class="tsd-property"><h4>address</h4>: <span class="tsd-signature-type">string</span></div>
</body></html>
"""

PREPARE_TRANSFER_HTML = """<html><body>
<section class="tsd-panel tsd-comment"><p>Builds a native transfer transaction.</p></section>
<ul class="tsd-parameters"><li>Recipient address <span class="tsd-kind-parameter">to</span>: <span class="tsd-signature-type">string</span></li></ul>
<h4 class="tsd-returns-title">Returns: <span class="tsd-signature-type">Transaction</span></h4>
</body></html>
"""

CHAIN_ENUM_HTML = "<html><body><p>Supported chains.</p></body></html>"

SDK_ENTRY_JS = """/**
 * Main SDK entry point.
 */
export class Demos {
}

/** Creates a wallet from a mnemonic. */
export async function createWallet(mnemonic) {}

function undocumented() {}
"""

SDK_TYPES_DTS = """export interface TransferOptions {
    to: string;
    amount: number;
}
export type ChainName = "xrp" | "evm";
export declare const DEFAULT_RPC: string;
"""


@pytest.fixture(autouse=True)
def reset_metrics():
    default_metrics.reset()
    yield
    default_metrics.reset()


@pytest.fixture
def api_ref_dir(tmp_path: Path) -> Path:
    """A small TypeDoc HTML output tree."""
    root = tmp_path / "demosdk-api-ref"
    pages = {
        "classes/websdk.Demos.html": DEMOS_CLASS_HTML,
        "interfaces/websdk.IWallet.html": WALLET_INTERFACE_HTML,
        "functions/websdk.prepareTransfer.html": PREPARE_TRANSFER_HTML,
        "enums/websdk.Chain.html": CHAIN_ENUM_HTML,
    }
    for relative, html in pages.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
    return root


@pytest.fixture
def sdk_dir(tmp_path: Path) -> Path:
    """A minimal installed SDK package with JS sources and declarations."""
    root = tmp_path / "node_modules" / "@kynesyslabs" / "demosdk"
    (root / "build").mkdir(parents=True)
    (root / "types").mkdir()
    (root / "node_modules" / "dep").mkdir(parents=True)
    (root / "package.json").write_text(
        json.dumps({"name": "@kynesyslabs/demosdk", "main": "build/index.js"}), encoding="utf-8"
    )
    (root / "build" / "index.js").write_text(SDK_ENTRY_JS, encoding="utf-8")
    (root / "types" / "index.d.ts").write_text(SDK_TYPES_DTS, encoding="utf-8")
    (root / "node_modules" / "dep" / "index.d.ts").write_text(
        "export interface ShouldNotAppear { x: number }", encoding="utf-8"
    )
    return root


@pytest.fixture
def make_config(tmp_path: Path):
    def _make(**overrides) -> DocsConfig:
        values = {
            "project_root": tmp_path,
            "docs_dir": tmp_path,
            "api_ref_dir": tmp_path / "missing-api-ref",
            "index_path": tmp_path / "docs-index.json",
            "sdk_paths": [tmp_path / "missing-sdk"],
            "typedoc_bin": None,
            "write_index_cache": False,
        }
        values.update(overrides)
        return DocsConfig(**values)

    return _make


def build_sample_index() -> DocIndex:
    index = DocIndex()
    index.add(
        ClassDoc(
            name="Demos",
            full_name="websdk.Demos",
            description="Main entry point for the Demos network.",
            content="Demos class reference",
            methods=(
                MethodDoc(name="connect", signature="connect(rpc: string): Promise<boolean>", description="Connects to an RPC node."),
                MethodDoc(name="confirm", signature="confirm(tx: Transaction)", description="Confirms a transaction."),
                MethodDoc(name="broadcast", signature="broadcast(validity)", description="Broadcasts a confirmed transaction."),
            ),
            properties=(PropertyDoc(name="rpc_url", type="string"),),
        )
    )
    index.add(
        ClassDoc(
            name="DemosWebAuth",
            full_name="websdk.DemosWebAuth",
            description="Keypair management for browser wallets.",
            methods=(MethodDoc(name="create", signature="create()", description="Creates a new keypair."),),
        )
    )
    index.add(
        InterfaceDoc(
            name="IWallet",
            full_name="websdk.IWallet",
            description="Wallet abstraction used by chain clients.",
            properties=(PropertyDoc(name="address", type="string"),),
        )
    )
    index.add(
        FunctionDoc(
            name="prepareTransfer",
            full_name="websdk.prepareTransfer",
            description="Builds a native transfer transaction.",
            parameters=(ParameterDoc(name="to", type="string", description="Recipient address"),),
            returns="Transaction",
        )
    )
    index.add(EnumDoc(name="Chain", full_name="websdk.Chain", description="Supported chains."))
    return index


class StaticBuilder:
    """Index builder stub returning a prepared index."""

    def __init__(self, index: DocIndex, source: str = "cache") -> None:
        self.index = index
        self.source = source
        self.calls = 0

    def build(self) -> BuildResult:
        self.calls += 1
        return BuildResult(index=self.index, source=self.source)


@pytest.fixture
def sample_index() -> DocIndex:
    return build_sample_index()


@pytest.fixture
def sample_context(make_config, sample_index) -> DocsContext:
    return DocsContext(make_config(), builder=StaticBuilder(sample_index))


@pytest.fixture
def empty_context(make_config) -> DocsContext:
    return DocsContext(make_config(), builder=StaticBuilder(DocIndex(), source="empty"))
