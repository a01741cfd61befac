from .base import (
    END_OF_TURN,
    Dialog,
    DialogContext,
    DialogInstance,
    DialogReason,
    DialogSet,
    DialogState,
    DialogTurnResult,
    DialogTurnStatus,
)
from .check_in import CHECK_IN_DIALOG, CheckInDialog
from .component import ComponentDialog
from .main_menu import MAIN_DIALOG, MainMenuDialog
from .prompts import DateTimePrompt, PromptOptions, TextPrompt
from .set_alarm import ALARM_DIALOG, SetAlarmDialog
from .waterfall import WaterfallDialog, WaterfallStepContext
