"""Static dashboard served at GET /."""

DASHBOARD_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Memory Leak Training Lab</title>
<style>
  body { font-family: "Segoe UI", Tahoma, sans-serif; background: #16213e; color: #eee; margin: 0; padding: 20px; }
  .container { max-width: 880px; margin: 0 auto; }
  h1 { text-align: center; color: #feca57; }
  .panel { background: rgba(255,255,255,0.08); border-radius: 12px; padding: 20px; margin-bottom: 20px; }
  .grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(180px, 1fr)); gap: 14px; }
  .item { background: rgba(255,255,255,0.05); border-radius: 8px; padding: 14px; text-align: center; }
  .value { font-size: 1.8em; font-weight: bold; color: #feca57; }
  .label { color: #aaa; font-size: 0.85em; margin-top: 4px; }
  .bar { height: 26px; background: rgba(255,255,255,0.1); border-radius: 13px; overflow: hidden; margin-top: 14px; }
  .bar-fill { height: 100%; width: 0%; background: linear-gradient(90deg, #4ecdc4, #feca57, #ff6b6b);
              text-align: center; font-weight: bold; transition: width 0.5s ease; }
  button { padding: 12px 20px; border: none; border-radius: 8px; font-weight: bold; cursor: pointer; margin: 4px; }
  .start { background: #ff6b6b; color: #fff; } .stop { background: #4ecdc4; color: #fff; }
  .clear { background: #a8e6cf; } .inject { background: #feca57; }
  #log { max-height: 200px; overflow-y: auto; font-family: Consolas, monospace; font-size: 0.9em; }
  .entry { padding: 6px 10px; margin: 4px 0; background: rgba(255,255,255,0.05); border-left: 3px solid #4ecdc4; }
  .entry.warning { border-left-color: #feca57; } .entry.error { border-left-color: #ff6b6b; }
</style>
</head>
<body>
<div class="container">
  <h1>Memory Leak Training Lab</h1>
  <div class="panel">
    <div class="grid">
      <div class="item"><div class="value" id="leaked">0.00</div><div class="label">Leaked Memory (MB)</div></div>
      <div class="item"><div class="value" id="objects">0</div><div class="label">Object Count</div></div>
      <div class="item"><div class="value" id="heap">0.00</div><div class="label">Process Memory (MB)</div></div>
      <div class="item"><div class="value" id="state">Stopped</div><div class="label">Leak Status</div></div>
    </div>
    <div class="bar"><div class="bar-fill" id="bar">0%</div></div>
    <div class="grid" style="margin-top: 14px">
      <div class="item"><div class="label">Gen 0</div><div class="value" id="gen0">0</div></div>
      <div class="item"><div class="label">Gen 1</div><div class="value" id="gen1">0</div></div>
      <div class="item"><div class="label">Gen 2</div><div class="value" id="gen2">0</div></div>
    </div>
  </div>
  <div class="panel">
    <button class="start" onclick="call('/start', 'warning')">Start Leak</button>
    <button class="stop" onclick="call('/stop')">Stop Leak</button>
    <button class="clear" onclick="call('/clear')">Clear Memory</button>
  </div>
  <div class="panel">
    <h3>One-time Memory Injection</h3>
    <input type="range" id="slider" min="10" max="200" value="50"
           oninput="document.getElementById('sliderValue').textContent = this.value">
    <span><span id="sliderValue">50</span> MB</span>
    <button class="inject" onclick="call('/leak?mb=' + document.getElementById('slider').value, 'warning')">Inject Memory</button>
  </div>
  <div class="panel"><h3>Activity Log</h3><div id="log"></div></div>
</div>
<script>
  function addLog(message, kind) {
    const log = document.getElementById('log');
    const entry = document.createElement('div');
    entry.className = 'entry ' + (kind || '');
    entry.textContent = '[' + new Date().toLocaleTimeString() + '] ' + message;
    log.insertBefore(entry, log.firstChild);
    if (log.children.length > 50) log.removeChild(log.lastChild);
  }

  async function call(path, kind) {
    try {
      const response = await fetch(path);
      addLog(await response.text(), kind);
    } catch (e) {
      addLog('Error: ' + e.message, 'error');
    }
  }

  async function refresh() {
    try {
      const data = await (await fetch('/status')).json();
      document.getElementById('leaked').textContent = data.leakedMemoryMB.toFixed(2);
      document.getElementById('objects').textContent = data.objectCount;
      document.getElementById('heap').textContent = data.gcHeapSizeMB.toFixed(2);
      document.getElementById('state').textContent = data.isLeaking ? 'Leaking' : 'Stopped';
      document.getElementById('gen0').textContent = data.gen0Collections;
      document.getElementById('gen1').textContent = data.gen1Collections;
      document.getElementById('gen2').textContent = data.gen2Collections;
      const available = data.totalAvailableMemoryMB || 1024;
      const percent = Math.min(data.gcHeapSizeMB / available * 100, 100);
      const bar = document.getElementById('bar');
      bar.style.width = percent + '%';
      bar.textContent = percent.toFixed(1) + '%';
    } catch (e) {
      console.error('Failed to update status:', e);
    }
  }

  setInterval(refresh, 1000);
  refresh();
  addLog('Memory Leak Training Lab started');
</script>
</body>
</html>
"""
