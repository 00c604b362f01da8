import logging
from typing import Any

import httpx

from hospital import config
from hospital.utils.timeslots import TimeRange


logger = logging.getLogger(__name__)


class ZoomError(Exception):
    pass


class ZoomService:
    """Server-to-server OAuth client for creating scheduled Zoom meetings"""

    TOKEN_URL = "https://zoom.us/oauth/token"  # noqa: S105 - OAuth endpoint URL
    BASE_URL = "https://api.zoom.us/v2"

    def __init__(self):
        self.account_id = config.ZOOM_ACCOUNT_ID
        self.client_id = config.ZOOM_CLIENT_ID
        self.client_secret = config.ZOOM_CLIENT_SECRET
        self.timezone = config.ZOOM_TIMEZONE

    async def get_access_token(self, client: httpx.AsyncClient) -> str:
        if not (self.account_id and self.client_id and self.client_secret):
            raise ZoomError("Zoom credentials not configured")

        response = await client.post(
            self.TOKEN_URL,
            auth=(self.client_id, self.client_secret),
            data={"grant_type": "account_credentials", "account_id": self.account_id},
        )
        if response.status_code != 200:
            logger.error(f"Zoom token request failed: {response.status_code} {response.text}")
            raise ZoomError("Failed to get Zoom access token")
        try:
            return response.json()["access_token"]
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Unexpected Zoom token response: {response.text[:200]}")
            raise ZoomError("Failed to get Zoom access token") from e

    async def create_meeting(self, name: str, department: str, date: str, time: str) -> dict[str, Any]:
        slot = TimeRange.parse(time)
        payload = {
            "topic": f"{department} Consultation - {name}",
            "type": 2,
            "start_time": slot.starts_on(date).strftime("%Y-%m-%dT%H:%M:%S"),
            "duration": slot.duration_minutes,
            "timezone": self.timezone,
            "agenda": f"Online consultation for {name} - {department}",
            "settings": {
                "host_video": True,
                "participant_video": True,
                "join_before_host": False,
                "mute_upon_entry": False,
                "waiting_room": True,
                "audio": "both",
                "auto_recording": "none",
                "approval_type": 0,
            },
        }

        try:
            async with httpx.AsyncClient(timeout=30) as client:
                token = await self.get_access_token(client)
                response = await client.post(
                    f"{self.BASE_URL}/users/me/meetings",
                    headers={"Authorization": f"Bearer {token}"},
                    json=payload,
                )
        except httpx.HTTPError as e:
            raise ZoomError(f"Zoom request failed: {e}") from e

        if response.status_code not in (200, 201):
            logger.error(f"Zoom meeting creation failed: {response.status_code} {response.text}")
            raise ZoomError(f"Zoom API error: {response.status_code}")

        try:
            data = response.json()
            meeting = {
                "meeting_link": data["join_url"],
                "meeting_id": str(data["id"]),
                "meeting_password": data.get("password") or "",
                "host_link": data.get("start_url") or "",
            }
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Unexpected Zoom meeting response: {response.text[:200]}")
            raise ZoomError("Zoom meeting response missing join details") from e

        logger.info(f"Zoom meeting created: {meeting['meeting_id']}")
        return meeting


async def create_zoom_meeting(name: str, department: str, date: str, time: str) -> dict[str, Any]:
    return await ZoomService().create_meeting(name=name, department=department, date=date, time=time)
