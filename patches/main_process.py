"""Descriptors for the upstream ``main-process.js`` bundle.

Why patches are needed
----------------------

The vendor only ships a Windows build. The minified main process assumes
Windows in a handful of places that break elsewhere:

1) The platform enum compares against "Linux" while Node reports "linux".
2) The tray icon is a relative .ico path; extraFiles live next to the
   resources directory and Linux trays need a PNG.
3) The app root is derived from the module path by stripping the Windows exe
   name, which does not match on other platforms.
4) The auto-updater points at an S3 feed with Windows builds only.
5) Firmware flashing calls the bundled dfu-util-static.exe; use the system
   dfu-util from PATH instead.
6) setLoginItemSettings() is Windows/macOS-only; guard the three call sites.

Order matters: the login-item guards match text adjacent to each other, and
every search string is the exact minified upstream text.
"""

from __future__ import annotations

from patcher.structures.schemas import PatchDescriptor

_LINUX = {"linux"}
_NON_WINDOWS = {"linux", "darwin"}

MAIN_PROCESS_PATCHES: list[PatchDescriptor] = [
    PatchDescriptor(
        name="fix-platform-string",
        search='e.Linux="Linux"',
        replace='e.Linux="linux"',
        expected_count=1,
    ),
    PatchDescriptor(
        name="fix-tray-icon",
        search='new e.Tray("src/resources/tray.ico")',
        replace=(
            'new e.Tray(require("path").join(require("process").resourcesPath,'
            '"..","src","resources","tray.png"))'
        ),
        platforms=_LINUX,
    ),
    PatchDescriptor(
        name="fix-app-root-path",
        search='return e.app.getPath("module").replace(t,"")',
        replace='return require("path").dirname(require("process").execPath)+require("path").sep',
        platforms=_NON_WINDOWS,
    ),
    PatchDescriptor(
        name="disable-auto-updater",
        search=(
            "il.autoUpdater.allowDowngrade=!0,"
            'il.autoUpdater.setFeedURL({provider:"s3",bucket:"azeron-public",'
            'path:"keypad-builds",channel:e?"beta":"latest"}),'
            "il.autoUpdater.autoInstallOnAppQuit=!1,il.autoUpdater.autoDownload=!1"
        ),
        replace="il.autoUpdater.autoInstallOnAppQuit=!1,il.autoUpdater.autoDownload=!1",
        platforms=_NON_WINDOWS,
    ),
    # Intentionally broad: every reference to the bundled binary name.
    PatchDescriptor(
        name="fix-dfu-util-name",
        search="dfu-util-static",
        replace="dfu-util",
        platforms=_LINUX,
    ),
    PatchDescriptor(
        name="fix-login-items-1",
        search="Ps(Ss.AUTO_START,n),e.app.setLoginItemSettings({openAtLogin:n})",
        replace='Ps(Ss.AUTO_START,n),"linux"!==process.platform&&e.app.setLoginItemSettings({openAtLogin:n})',
        platforms=_LINUX,
    ),
    PatchDescriptor(
        name="fix-login-items-2",
        search=(
            "Ps(Ss.AUTO_START_MINIMIZED,n),e.app.setLoginItemSettings({openAtLogin:!0,"
            'path:e.app.getPath("exe"),args:n?["--minimized"]:[]})'
        ),
        replace=(
            'Ps(Ss.AUTO_START_MINIMIZED,n),"linux"!==process.platform&&'
            'e.app.setLoginItemSettings({openAtLogin:!0,path:e.app.getPath("exe"),'
            'args:n?["--minimized"]:[]})'
        ),
        platforms=_LINUX,
    ),
    PatchDescriptor(
        name="fix-login-items-3",
        search=(
            'e.app.setLoginItemSettings({openAtLogin:r,path:e.app.getPath("exe"),'
            'args:o?["--minimized"]:[]}),'
        ),
        replace=(
            '"linux"!==process.platform&&e.app.setLoginItemSettings({openAtLogin:r,'
            'path:e.app.getPath("exe"),args:o?["--minimized"]:[]}),'
        ),
        platforms=_LINUX,
    ),
]
