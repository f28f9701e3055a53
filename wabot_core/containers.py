from dependency_injector import containers, providers

from wabot_core.dispatcher import Dispatcher
from wabot_core.message_manager import MessageManager
from wabot_core.permissions import AuthorizationGate
from wabot_core.settings import Settings
from wabot_core.storage import ConfigStore
from wabot_core.subscriptions import FileSubscriptionLookup
from wabot_core.transport import ConsoleTransport
from wabot_plugins.manager import PackagePluginSource
from wabot_plugins.registry import PluginRegistry


class Container(containers.DeclarativeContainer):
    """Dependency Injection Container for the bot.

    Every service is a singleton so the dispatcher, the gate and the command
    handlers all share one ConfigStore (and therefore one set of path locks)
    and one live plugin registry.
    """

    # Configuration provider for application settings, loaded from env / .env
    config = providers.Singleton(Settings)

    config_store = providers.Singleton(ConfigStore, root=config.provided.data_dir)

    subscriptions = providers.Singleton(FileSubscriptionLookup, store=config_store)

    authorization = providers.Singleton(
        AuthorizationGate,
        owner_number=config.provided.owner_number,
        dev_numbers=config.provided.dev_numbers,
        subscriptions=subscriptions,
    )

    plugin_source = providers.Singleton(PackagePluginSource, package=config.provided.plugin_package)

    registry = providers.Singleton(PluginRegistry, source=plugin_source)

    # The transport is the outermost boundary; tests override it with a fake.
    transport = providers.Singleton(ConsoleTransport)

    dispatcher = providers.Singleton(
        Dispatcher,
        registry=registry,
        gate=authorization,
        store=config_store,
        transport=transport,
        default_prefix=config.provided.command_prefix,
        handler_timeout_s=config.provided.handler_timeout_s,
        unknown_command_policy=config.provided.unknown_command_policy,
    )

    message_manager = providers.Singleton(
        MessageManager,
        dispatcher=dispatcher,
        max_concurrent=config.provided.max_concurrent_messages,
    )


# Example:
#
#     container = Container()
#     container.config.override(providers.Object(Settings(data_dir="/tmp/bot")))
#     registry = container.registry()
#     registry.load()
#     await container.message_manager().run(container.transport())
