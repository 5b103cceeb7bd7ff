"""Command router for host messages.

The router is the renderer's single entry point for inbound traffic.
Each ``(command, content)`` pair is validated into a typed
:class:`~inkwell.ui.models.commands.Command` and handed to exactly one
handler, which runs to completion before ``dispatch`` returns. Nothing
that goes wrong inside a message (unknown tag, malformed payload, a
failing collaborator) escapes ``dispatch``: the next message is always
processed.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from ..events import CommandRejected, TreeReplaced, UnrecognizedCommand
from ..models.commands import (
    BlobPayload,
    CommandTag,
    ConfigPayload,
    LanguagesPayload,
    NodePayload,
    OpaquePayload,
    Payload,
    PayloadError,
    TargetPayload,
    TogglePayload,
    TreePayload,
    parse_command,
)
from ..models.paths import PathNode
from .config_ops import ApplyConfigUseCase
from .context import RendererContext
from .spellcheck_ops import LoadSpellcheckUseCase

LOGGER = logging.getLogger(__name__)

CommandHandler = Callable[[Any], None]

_BLOB_COMMANDS = frozenset({CommandTag.TYPO_AFF, CommandTag.TYPO_DIC})
_ZOOM_STEPS: Dict[CommandTag, int] = {
    CommandTag.ZOOM_RESET: 0,
    CommandTag.ZOOM_IN: 1,
    CommandTag.ZOOM_OUT: -1,
}


class CommandRouter:
    """Maps every :class:`CommandTag` to its handler.

    Events Emitted:
        - UnrecognizedCommand: For tags outside :class:`CommandTag`
        - CommandRejected: For payloads that fail validation
        - TreeReplaced: After ``paths``/``paths-update`` installed a tree
        - plus whatever the domain services and use cases publish

    Raises:
        RuntimeError: At construction, if a tag has no handler.
    """

    __slots__ = ("_context", "_config", "_spellcheck", "_handlers")

    def __init__(self, context: RendererContext) -> None:
        self._context = context
        self._config = ApplyConfigUseCase(context)
        self._spellcheck = LoadSpellcheckUseCase(context)
        self._handlers: Dict[CommandTag, CommandHandler] = {
            CommandTag.PATHS: self._on_paths,
            CommandTag.PATHS_UPDATE: self._on_paths_update,
            CommandTag.DIR_SET_CURRENT: self._on_dir_set_current,
            CommandTag.DIR_FIND: self._on_dir_find,
            CommandTag.DIR_OPEN: self._on_dir_open,
            CommandTag.DIR_RENAME: self._on_dir_rename,
            CommandTag.DIR_NEW: self._on_dir_new,
            CommandTag.DIR_DELETE: self._on_dir_delete,
            CommandTag.FILE_SET_CURRENT: self._on_file_set_current,
            CommandTag.FILE_OPEN: self._on_file_open,
            CommandTag.FILE_CLOSE: self._on_file_close,
            CommandTag.FILE_SAVE: self._on_file_save,
            CommandTag.FILE_RENAME: self._on_file_rename,
            CommandTag.FILE_NEW: self._on_file_new,
            CommandTag.FILE_FIND: self._on_file_find,
            CommandTag.FILE_INSERT: self._on_file_insert,
            CommandTag.FILE_DELETE: self._on_file_delete,
            CommandTag.FILE_SEARCH_RESULT: self._on_file_search_result,
            CommandTag.TOGGLE_THEME: self._on_toggle_theme,
            CommandTag.TOGGLE_SNIPPETS: self._on_toggle_snippets,
            CommandTag.TOGGLE_DIRECTORIES: self._on_toggle_directories,
            CommandTag.TOGGLE_PREVIEW: self._on_toggle_preview,
            CommandTag.EXPORT: self._on_export,
            CommandTag.OPEN_PREFERENCES: self._on_open_preferences,
            CommandTag.PREFERENCES: self._on_preferences,
            CommandTag.CM_COMMAND: self._on_cm_command,
            CommandTag.CONFIG: self._on_config,
            CommandTag.TYPO_LANG: self._on_typo_lang,
            CommandTag.TYPO_AFF: self._on_typo_aff,
            CommandTag.TYPO_DIC: self._on_typo_dic,
            CommandTag.QUICKLOOK: self._on_quicklook,
            CommandTag.FILE_QUICKLOOK: self._on_file_quicklook,
            CommandTag.NOTIFY: self._on_notify,
            CommandTag.POMODORO: self._on_pomodoro,
            CommandTag.ZOOM_RESET: self._on_zoom_reset,
            CommandTag.ZOOM_IN: self._on_zoom_in,
            CommandTag.ZOOM_OUT: self._on_zoom_out,
        }
        missing = [tag.value for tag in CommandTag if tag not in self._handlers]
        if missing:
            raise RuntimeError(f"No handler registered for: {', '.join(missing)}")

    @property
    def context(self) -> RendererContext:
        return self._context

    @property
    def config(self) -> ApplyConfigUseCase:
        return self._config

    def handles(self, command: str) -> bool:
        return CommandTag.lookup(command) in self._handlers

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, command: str, content: Any = None) -> None:
        """Handle one host message synchronously."""
        tag = CommandTag.lookup(command) if isinstance(command, str) else None
        if tag is None:
            LOGGER.warning("Unknown command received: %r", command)
            self._context.event_bus.publish(UnrecognizedCommand(command=str(command)))
            return

        if tag in _BLOB_COMMANDS:
            LOGGER.debug("<- host: %s (%d bytes)", tag.value, _blob_size(content))
        else:
            LOGGER.debug("<- host: %s", tag.value)

        try:
            parsed = parse_command(tag, content)
        except PayloadError as exc:
            LOGGER.warning("Rejected %s payload: %s", tag.value, exc.message)
            self._context.event_bus.publish(CommandRejected(command=tag.value, reason=exc.message))
            return
        except Exception:
            LOGGER.exception("Parsing %s payload failed", tag.value)
            return

        handler = self._handlers[tag]
        try:
            handler(parsed.payload)
        except Exception:
            LOGGER.exception("Handler for %s failed", tag.value)

    # ------------------------------------------------------------------
    # Tree snapshots
    # ------------------------------------------------------------------

    def _on_paths(self, payload: TreePayload) -> None:
        ctx = self._context
        ctx.ui.body.close_quicklook()
        ctx.path_index.replace(payload.root)
        root = ctx.path_index.root
        ctx.session.replace_selection(root, None)
        self._publish_tree()

        ctx.ui.directories.empty()
        ctx.ui.directories.refresh()
        ctx.ui.preview.refresh()
        if root is not None:
            ctx.ui.directories.select(root.identifier)

    def _on_paths_update(self, payload: TreePayload) -> None:
        ctx = self._context
        ctx.path_index.replace(payload.root)
        ctx.session.resync(ctx.path_index)
        self._publish_tree()

        ctx.ui.directories.refresh()
        ctx.ui.preview.refresh()

    def _publish_tree(self) -> None:
        index = self._context.path_index
        root_id = None if index.root is None else index.root.identifier
        self._context.event_bus.publish(TreeReplaced(root_id=root_id, node_count=index.node_count))

    # ------------------------------------------------------------------
    # Directories
    # ------------------------------------------------------------------

    def _on_dir_set_current(self, payload: NodePayload) -> None:
        folder = self._resolve(payload.node)
        self._context.session.set_current_folder(folder)
        if folder is not None:
            self._context.ui.directories.select(folder.identifier)
        self._context.ui.preview.refresh()

    def _on_dir_find(self, payload: Payload) -> None:
        self._context.ui.toolbar.focus_search()

    def _on_dir_open(self, payload: Payload) -> None:
        self._context.host.open_directory()

    def _on_dir_rename(self, payload: TargetPayload) -> None:
        if payload.identifier is not None:
            folder = self._lookup(payload.identifier, "dir-rename")
            if folder is not None:
                self._context.ui.body.request_new_dir_name(folder)
            return

        folder = self._context.session.get_current_folder()
        if folder is None:
            return
        if not self._is_renamable(folder):
            LOGGER.debug("dir-rename: %s is a top-level folder; not renamable", folder.identifier)
            return
        self._context.ui.body.request_new_dir_name(folder)

    def _on_dir_new(self, payload: TargetPayload) -> None:
        if payload.identifier is not None:
            parent = self._lookup(payload.identifier, "dir-new")
            if parent is None:
                return
        else:
            parent = self._context.session.get_current_folder()
        self._context.ui.body.request_dir_name(parent)

    def _on_dir_delete(self, payload: TargetPayload) -> None:
        self._context.host.delete_directory(payload.identifier)

    def _is_renamable(self, folder: PathNode) -> bool:
        """The root and its direct children are managed by the host."""
        if folder.is_root:
            return False
        parent = self._context.path_index.parent_of(folder.identifier)
        return parent is None or not parent.is_root

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def _on_file_set_current(self, payload: NodePayload) -> None:
        document = self._resolve(payload.node)
        self._context.session.set_current_document(document)
        if document is not None:
            self._context.ui.preview.select(document.identifier)

    def _on_file_open(self, payload: NodePayload) -> None:
        ui = self._context.ui
        ui.editor.close()
        document = self._resolve(payload.node)
        self._context.session.set_current_document(document)
        if document is None:
            LOGGER.warning("file-open without a document")
            return
        ui.preview.select(document.identifier)
        ui.editor.open(document)

    def _on_file_close(self, payload: Payload) -> None:
        self._context.ui.editor.close()
        self._context.session.set_current_document(None)

    def _on_file_save(self, payload: Payload) -> None:
        editor = self._context.ui.editor
        document = self._context.session.get_current_document()
        if document is None:
            # No hash tells the host this is a new file
            request: dict[str, Any] = {"hash": None}
        else:
            request = document.to_payload()
        request["content"] = editor.get_value()
        request["wordcount"] = editor.get_written_words()
        self._context.host.save_file(request)

    def _on_file_rename(self, payload: TargetPayload) -> None:
        if payload.identifier is not None:
            document = self._lookup(payload.identifier, "file-rename")
        else:
            document = self._context.session.get_current_document()
        if document is not None:
            self._context.ui.body.request_new_file_name(document)

    def _on_file_new(self, payload: TargetPayload) -> None:
        if payload.identifier is not None:
            parent = self._lookup(payload.identifier, "file-new")
            if parent is None:
                return
        else:
            parent = self._context.session.get_current_folder()
        self._context.ui.body.request_file_name(parent)

    def _on_file_find(self, payload: Payload) -> None:
        self._context.ui.editor.open_find()

    def _on_file_insert(self, payload: Payload) -> None:
        self._context.ui.preview.refresh()

    def _on_file_delete(self, payload: TargetPayload) -> None:
        self._context.host.delete_file(payload.identifier)

    def _on_file_search_result(self, payload: OpaquePayload) -> None:
        self._context.ui.preview.handle_search_result(payload.content)

    # ------------------------------------------------------------------
    # Toggles
    # ------------------------------------------------------------------

    def _on_toggle_theme(self, payload: TogglePayload) -> None:
        ctx = self._context
        for collaborator in ctx.ui.themed():
            collaborator.toggle_theme()
        ctx.settings.dark_theme = not ctx.settings.dark_theme
        if payload.emit:
            ctx.host.notify_theme_toggled()

    def _on_toggle_snippets(self, payload: TogglePayload) -> None:
        ctx = self._context
        ctx.ui.preview.toggle_snippets()
        ctx.settings.snippets = not ctx.settings.snippets
        if payload.emit:
            ctx.host.notify_snippets_toggled()

    def _on_toggle_directories(self, payload: Payload) -> None:
        ui = self._context.ui
        ui.directories.toggle_display()
        ui.preview.toggle_directories()
        ui.editor.toggle_directories()

    def _on_toggle_preview(self, payload: Payload) -> None:
        self._context.ui.editor.toggle_preview()

    # ------------------------------------------------------------------
    # Dialogs, preferences, editor
    # ------------------------------------------------------------------

    def _on_export(self, payload: Payload) -> None:
        document = self._context.session.get_current_document()
        if document is not None:
            self._context.ui.body.display_export(document)

    def _on_open_preferences(self, payload: Payload) -> None:
        self._context.host.request_preferences()

    def _on_preferences(self, payload: OpaquePayload) -> None:
        self._context.ui.body.display_preferences(payload.content)

    def _on_cm_command(self, payload: OpaquePayload) -> None:
        editor = self._context.ui.editor
        editor.run_command(payload.content)
        editor.focus()

    def _on_config(self, payload: ConfigPayload) -> None:
        self._config.execute(payload.key, payload.value)

    # ------------------------------------------------------------------
    # Spell-check
    # ------------------------------------------------------------------

    def _on_typo_lang(self, payload: LanguagesPayload) -> None:
        self._spellcheck.begin(payload.languages)
        self._context.ui.body.set_spellcheck_langs(payload.languages)

    def _on_typo_aff(self, payload: BlobPayload) -> None:
        self._spellcheck.affix_received(payload.data)

    def _on_typo_dic(self, payload: BlobPayload) -> None:
        self._spellcheck.dictionary_received(payload.data)

    # ------------------------------------------------------------------
    # Misc
    # ------------------------------------------------------------------

    def _on_quicklook(self, payload: TargetPayload) -> None:
        if payload.identifier is not None:
            self._context.host.request_quicklook(payload.identifier)

    def _on_file_quicklook(self, payload: OpaquePayload) -> None:
        self._context.ui.body.quicklook(payload.content)

    def _on_notify(self, payload: OpaquePayload) -> None:
        self._context.ui.body.notify(payload.content)

    def _on_pomodoro(self, payload: Payload) -> None:
        self._context.ui.pomodoro.popup()

    def _on_zoom_reset(self, payload: Payload) -> None:
        self._context.ui.editor.zoom(_ZOOM_STEPS[CommandTag.ZOOM_RESET])

    def _on_zoom_in(self, payload: Payload) -> None:
        self._context.ui.editor.zoom(_ZOOM_STEPS[CommandTag.ZOOM_IN])

    def _on_zoom_out(self, payload: Payload) -> None:
        self._context.ui.editor.zoom(_ZOOM_STEPS[CommandTag.ZOOM_OUT])

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve(self, node: PathNode | None) -> PathNode | None:
        """Swap a node from a message for the snapshot's own copy, if present."""
        if node is None:
            return None
        return self._context.path_index.find(node.identifier) or node

    def _lookup(self, identifier: Any, command: str) -> PathNode | None:
        node = self._context.path_index.find(identifier)
        if node is None:
            LOGGER.warning("%s: no entry with identifier %r", command, identifier)
        return node


def _blob_size(content: Any) -> int:
    try:
        return len(content)
    except TypeError:
        return 0


__all__ = ["CommandRouter", "CommandHandler"]
