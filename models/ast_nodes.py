# -*- coding: utf-8 -*-
"""
AST Node Definitions

One frozen dataclass per statement kind. Every node carries the line it
started on; Label is the only node that owns other nodes.
"""

from dataclasses import dataclass, field, fields, is_dataclass, asdict
from typing import Any, ClassVar, Dict, Optional, Tuple

from renparse_enums import NodeKind


@dataclass(frozen=True)
class AstNode:
    """Base class for all statement nodes."""
    kind: ClassVar[NodeKind]

    line: int

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form used for JSON output."""
        data: Dict[str, Any] = {'kind': self.kind.value}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, tuple) and value and isinstance(value[0], AstNode):
                value = [child.to_dict() for child in value]
            elif isinstance(value, tuple):
                value = list(value)
            elif is_dataclass(value):
                value = asdict(value)
            data[f.name] = value
        return data


@dataclass(frozen=True)
class ParameterInfo:
    """Label parameter list: label name(a, b, *rest, **extra)."""
    parameters: Tuple[str, ...] = ()
    positional: Tuple[str, ...] = ()
    extrapos: Optional[str] = None
    extrakw: Optional[str] = None


@dataclass(frozen=True)
class AudioModifiers:
    """Optional clauses of a play statement."""
    loop: Optional[bool] = None
    fadein: Optional[float] = None


@dataclass(frozen=True)
class Define(AstNode):
    kind: ClassVar[NodeKind] = NodeKind.DEFINE

    raw_text: str


@dataclass(frozen=True)
class Label(AstNode):
    kind: ClassVar[NodeKind] = NodeKind.LABEL

    name: str
    body: Tuple[AstNode, ...] = ()
    parameters: Optional[ParameterInfo] = None


@dataclass(frozen=True)
class Jump(AstNode):
    kind: ClassVar[NodeKind] = NodeKind.JUMP

    target: str
    is_expression: bool = False


@dataclass(frozen=True)
class Return(AstNode):
    kind: ClassVar[NodeKind] = NodeKind.RETURN

    value: Optional[str] = None


@dataclass(frozen=True)
class Scene(AstNode):
    kind: ClassVar[NodeKind] = NodeKind.SCENE

    image: Optional[str] = None
    layer: str = "master"
    tag: Optional[str] = None


@dataclass(frozen=True)
class Show(AstNode):
    kind: ClassVar[NodeKind] = NodeKind.SHOW

    imagespec: str


@dataclass(frozen=True)
class Hide(AstNode):
    kind: ClassVar[NodeKind] = NodeKind.HIDE

    imagespec: str


@dataclass(frozen=True)
class Play(AstNode):
    kind: ClassVar[NodeKind] = NodeKind.PLAY

    channel: str
    file: str
    modifiers: AudioModifiers = field(default_factory=AudioModifiers)


@dataclass(frozen=True)
class Stop(AstNode):
    kind: ClassVar[NodeKind] = NodeKind.STOP

    channel: str
    fade_kind: Optional[str] = None
    fade_seconds: Optional[float] = None


@dataclass(frozen=True)
class GameMechanic(AstNode):
    kind: ClassVar[NodeKind] = NodeKind.GAME_MECHANIC

    text: str


@dataclass(frozen=True)
class LLMGenerate(AstNode):
    kind: ClassVar[NodeKind] = NodeKind.LLM_GENERATE

    model: str
    prompt: Optional[str] = None


@dataclass(frozen=True)
class Say(AstNode):
    """Dialogue when speaker is set, narration when it is None."""
    kind: ClassVar[NodeKind] = NodeKind.SAY

    speaker: Optional[str]
    text: str
