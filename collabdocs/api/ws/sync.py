"""
Канал совместного редактирования.

Сервер только ретранслирует правки остальным участникам: слияния
конкурентных изменений нет, содержимое документа здесь не сохраняется.
Права проверяются при подключении и заново перед каждой правкой, так что
отзыв доступа действует и на открытые соединения.
"""

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from typing import Callable, Dict, List, Optional
import json
import logging
import uuid

from collabdocs.core.auth import JWTVerifier, extract_token_from_header, get_token_verifier
from collabdocs.core.db import get_session_factory
from collabdocs.core.exceptions import AppException, NotFoundException
from collabdocs.domains.sharing.entities import Permission
from collabdocs.domains.sharing.services import AccessControlService

logger = logging.getLogger(__name__)

router = APIRouter()


class ConnectionManager:
    def __init__(self):
        # Хранилище активных соединений: {document_id: {username: [websocket, ...]}}
        # у одного пользователя может быть открыто несколько вкладок
        self.active_connections: Dict[str, Dict[str, List[WebSocket]]] = {}

    def active_users(self, document_id: str) -> list:
        return list(self.active_connections.get(document_id, {}).keys())

    def is_connected(self, document_id: str, username: str) -> bool:
        return username in self.active_connections.get(document_id, {})

    async def connect(self, websocket: WebSocket, document_id: str, username: str, permission: Permission):
        """Подключение пользователя к документу"""
        await websocket.accept()

        first_connection = not self.is_connected(document_id, username)
        self.active_connections.setdefault(document_id, {}).setdefault(username, []).append(websocket)
        logger.info("User %s joined document %s with %s", username, document_id, permission.value)

        await websocket.send_text(json.dumps({
            "type": "connected",
            "data": {
                "document_id": document_id,
                "username": username,
                "permission": permission.value,
                "active_users": self.active_users(document_id)
            }
        }))

        if first_connection:
            await self.broadcast_to_document(document_id, {
                "type": "user_joined",
                "data": {
                    "username": username,
                    "active_users": self.active_users(document_id)
                }
            }, exclude=websocket)

    def disconnect(self, document_id: str, username: str, websocket: WebSocket) -> bool:
        """Отключение одного соединения; True, если у пользователя остались другие"""
        connections = self.active_connections.get(document_id)
        if connections is None or username not in connections:
            return False

        remaining = [ws for ws in connections[username] if ws is not websocket]
        if remaining:
            connections[username] = remaining
        else:
            del connections[username]
            logger.info("User %s left document %s", username, document_id)

        if not connections:
            del self.active_connections[document_id]

        return bool(remaining)

    async def broadcast_to_document(self, document_id: str, message: dict, exclude: Optional[WebSocket] = None):
        """Рассылка сообщения всем соединениям документа, кроме exclude"""
        if document_id not in self.active_connections:
            return

        message_json = json.dumps(message)
        broken = []

        for username, sockets in list(self.active_connections[document_id].items()):
            for websocket in list(sockets):
                if websocket is exclude:
                    continue

                try:
                    await websocket.send_text(message_json)
                except (WebSocketDisconnect, RuntimeError) as e:
                    logger.warning("Dropping connection of %s on document %s: %s", username, document_id, e)
                    broken.append((username, websocket))

        for username, websocket in broken:
            self.disconnect(document_id, username, websocket)


manager = ConnectionManager()


async def _authenticate(websocket: WebSocket, verifier: JWTVerifier, token: Optional[str]) -> Optional[str]:
    token = token or extract_token_from_header(websocket.headers.get("authorization"))
    if not token:
        return None
    try:
        return verifier.verify(token)
    except AppException:
        return None


async def _current_permission(
    session_factory: Callable,
    document_uuid: uuid.UUID,
    username: str
) -> Optional[Permission]:
    """Эффективный уровень доступа; None, если доступа нет или документ удален.

    Сессия живет только на время проверки и не держит соединение из пула.
    """
    async with session_factory() as session:
        try:
            return await AccessControlService(session).effective_permission(document_uuid, username)
        except NotFoundException:
            return None


async def _leave(document_id: str, username: str, websocket: WebSocket):
    if manager.disconnect(document_id, username, websocket):
        return

    await manager.broadcast_to_document(document_id, {
        "type": "user_left",
        "data": {
            "username": username,
            "active_users": manager.active_users(document_id)
        }
    })


@router.websocket("/collaboration/documents/{document_uuid}/ws")
async def websocket_endpoint(
    websocket: WebSocket,
    document_uuid: uuid.UUID,
    token: Optional[str] = None,
    verifier: JWTVerifier = Depends(get_token_verifier),
    session_factory: Callable = Depends(get_session_factory)
):
    """WebSocket эндпоинт для совместного редактирования"""
    username = await _authenticate(websocket, verifier, token)
    if username is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    permission = await _current_permission(session_factory, document_uuid, username)
    if permission is None:
        logger.warning("User %s denied collaboration on document %s", username, document_uuid)
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    document_id = str(document_uuid)
    await manager.connect(websocket, document_id, username, permission)

    try:
        while True:
            try:
                message = json.loads(await websocket.receive_text())
            except json.JSONDecodeError:
                message = None

            if not isinstance(message, dict):
                await websocket.send_text(json.dumps({
                    "type": "error",
                    "data": {"code": "invalid_message", "message": "Message must be a JSON object"}
                }))
                continue

            message_type = message.get("type")

            if message_type == "edit":
                permission = await _current_permission(session_factory, document_uuid, username)
                if permission is None:
                    logger.warning("Access of %s to document %s is gone, closing connection", username, document_uuid)
                    await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
                    break

                if not permission.implies(Permission.WRITE):
                    await websocket.send_text(json.dumps({
                        "type": "error",
                        "data": {"code": "forbidden", "message": "WRITE permission required"}
                    }))
                    continue

                await manager.broadcast_to_document(document_id, {
                    "type": "edit",
                    "data": {"username": username, "payload": message.get("data")}
                }, exclude=websocket)

            elif message_type == "ping":
                await websocket.send_text(json.dumps({"type": "pong"}))

    except WebSocketDisconnect:
        logger.info("Connection of %s to document %s closed by client", username, document_uuid)
    finally:
        await _leave(document_id, username, websocket)
