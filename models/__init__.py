from .base import Base
from .conversation import Conversation, DEFAULT_TITLE
from .message import Message, ROLES
from .crisis_contact import CrisisContact
