"""Tests for the regex-based component extractor."""

from __future__ import annotations

from plugins_automation.analyzers.components import (
    ComponentExtractor,
    extract_component_details,
    extract_references,
    find_array_body,
    parse_import_aliases,
    read_index,
)
from plugins_automation.models import ComponentInfo, PluginInfo


def _info() -> PluginInfo:
    return PluginInfo(name="x", description="", package_name="x")


def test_alias_resolves_to_original_action_name(repo_builder) -> None:
    repo_builder.write(
        {
            "src/index.ts": """
            import { transferAction as sendToken } from './actions';

            export const plugin = {
              name: 'wallet',
              actions: [sendToken],
            };
            """,
        }
    )
    info = _info()

    ComponentExtractor().extract(repo_builder.path(), read_index(repo_builder.path()), info)

    assert [action.name for action in info.actions] == ["transferAction"]


def test_parse_import_aliases_handles_default_and_named_imports() -> None:
    text = (
        "import swap from './providers/swap';\n"
        "import { priceProvider, walletProvider as wallet } from './providers';\n"
    )

    aliases = parse_import_aliases(text, "providers")

    assert aliases == {"swap": "swap", "priceProvider": "priceProvider", "wallet": "walletProvider"}


def test_extract_references_drops_keywords_comments_and_duplicates() -> None:
    body = """
        // legacyAction,
        helloAction, /* disabledAction */
        new FooAction(),
        helloAction,
    """

    assert extract_references(body, {}) == ["helloAction", "FooAction"]


def test_find_array_body_supports_assignment_forms() -> None:
    assert find_array_body("plugin.providers = [timeProvider];", "providers") == "timeProvider"
    assert find_array_body("export const actions = [a1, a2];", "actions") == "a1, a2"
    assert find_array_body("const x = 1;", "services") is None


def test_services_keep_only_service_class_names(repo_builder) -> None:
    repo_builder.write(
        {
            "src/index.ts": """
            export const plugin = {
              services: [WalletService, helperFactory, WalletService],
            };
            """,
        }
    )
    info = _info()

    ComponentExtractor().extract(repo_builder.path(), read_index(repo_builder.path()), info)

    assert [service.name for service in info.services] == ["WalletService"]


def test_inline_action_objects_are_included(repo_builder) -> None:
    repo_builder.write(
        {
            "src/index.ts": """
            export default {
              name: 'demo',
              actions: [helloAction, { name: "PING", handler: run }],
            };
            """,
        }
    )
    info = _info()

    ComponentExtractor().extract(repo_builder.path(), read_index(repo_builder.path()), info)

    names = [action.name for action in info.actions]
    assert names[0] == "helloAction"
    assert "PING" in names


def test_component_source_is_located_with_suffix_stripped(repo_builder) -> None:
    repo_builder.write(
        {
            "src/index.ts": "export const plugin = { actions: [transferAction] };\n",
            "src/actions/transfer.ts": """
            /**
             * Transfers tokens between wallets.
             */
            export const transferAction = {
              name: 'TRANSFER',
              aliases: ['SEND_TOKEN', "PAY"],
            };

            interface TransferContent {
              recipient: string; // wallet address
              amount?: number;
            }
            """,
        }
    )
    info = _info()

    ComponentExtractor().extract(repo_builder.path(), read_index(repo_builder.path()), info)

    action = info.actions[0]
    assert action.file_path == "src/actions/transferAction"
    assert action.description == "Transfers tokens between wallets."
    assert action.aliases == ["SEND_TOKEN", "PAY"]


def test_interface_parameters_are_extracted() -> None:
    component = ComponentInfo(name="Transfer")
    source = """
    interface TransferContent {
      recipient: string; // wallet address
      amount?: number;
    }
    """

    extract_component_details(component, source, "actions")

    assert [(p.name, p.type, p.required, p.description) for p in component.parameters] == [
        ("recipient", "string", True, "wallet address"),
        ("amount", "number", False, ""),
    ]


def test_zod_parameters_are_extracted() -> None:
    component = ComponentInfo(name="swap")
    source = """
    const swapSchema = z.object({
      inputToken: z.string(),
      slippage: z.number().optional(),
    });
    """

    extract_component_details(component, source, "actions")

    assert [(p.name, p.type, p.required) for p in component.parameters] == [
        ("inputToken", "string", True),
        ("slippage", "number", False),
    ]


def test_service_methods_skip_constructor_and_private_names() -> None:
    component = ComponentInfo(name="WalletService")
    source = """
    export class WalletService extends Service {
      constructor(runtime) {
        super(runtime);
      }
      async getBalance(address: string): Promise<number> {
        if (address) {
          return 1;
        }
      }
      _internal() {
      }
    }
    """

    extract_component_details(component, source, "services")

    assert [(m.name, m.parameters) for m in component.methods] == [("getBalance", "address: string")]


def test_directory_fallback_when_index_is_silent(repo_builder) -> None:
    repo_builder.write(
        {
            "src/index.ts": "export const plugin = { name: 'x' };\n",
            "src/providers/time.ts": "export const timeProvider = { get: () => Date.now() };\n",
            "src/actions/ping.js": "export default { name: 'PING' };\n",
        }
    )
    info = _info()

    ComponentExtractor().extract(repo_builder.path(), read_index(repo_builder.path()), info)

    assert [provider.name for provider in info.providers] == ["timeProvider"]
    assert [action.name for action in info.actions] == ["PING"]
    assert info.services == []


def test_events_and_evaluators_are_captured(repo_builder) -> None:
    repo_builder.write(
        {
            "src/index.ts": """
            export const plugin = {
              evaluators: [factEvaluator],
              events: [onMessage, onJoin],
            };
            """,
        }
    )
    info = _info()

    ComponentExtractor().extract(repo_builder.path(), read_index(repo_builder.path()), info)

    assert info.evaluators == ["factEvaluator"]
    assert info.events == ["onMessage", "onJoin"]
