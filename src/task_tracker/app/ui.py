from __future__ import annotations

import html
import json


def render_homepage(app_name: str = "task-tracker", api_base: str = "/api") -> str:
    return (
        _PAGE.replace("__APP_NAME__", html.escape(app_name))
        .replace("__API_BASE__", json.dumps(api_base.rstrip("/")))
    )


_PAGE = """
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Task Manager | __APP_NAME__</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link
    href="https://fonts.googleapis.com/css2?family=Space+Grotesk:wght@400;500;700&display=swap"
    rel="stylesheet"
  >
  <style>
    :root {
      --bg: #f1f4f8;
      --panel: #ffffff;
      --ink: #1e293b;
      --muted: #64748b;
      --accent: #3b82f6;
      --accent-strong: #2563eb;
      --line: #e2e8f0;
      --warn: #dc2626;
      --yellow: #fef9c3;
      --blue: #dbeafe;
      --green: #dcfce7;
    }
    * { box-sizing: border-box; }
    body {
      margin: 0;
      min-height: 100vh;
      font-family: "Space Grotesk", sans-serif;
      color: var(--ink);
      background: linear-gradient(135deg, #f8fafc 0%, var(--bg) 100%);
    }
    .wrap {
      max-width: 880px;
      margin: 32px auto;
      padding: 0 16px 24px;
      display: grid;
      gap: 16px;
    }
    .hero { text-align: center; }
    .title { margin: 0; font-size: clamp(1.6rem, 3vw, 2.4rem); }
    .sub { margin: 6px 0 0; color: var(--muted); }
    .toolbar {
      display: flex;
      justify-content: space-between;
      align-items: center;
      gap: 10px;
      flex-wrap: wrap;
    }
    .card {
      background: var(--panel);
      border: 1px solid var(--line);
      border-left-width: 4px;
      border-radius: 14px;
      padding: 18px;
      box-shadow: 0 4px 14px rgba(30, 41, 59, 0.06);
    }
    .card.priority-high { border-left-color: #f87171; }
    .card.priority-medium { border-left-color: #fb923c; }
    .card.priority-low { border-left-color: #94a3b8; }
    .task-head { display: flex; align-items: center; gap: 10px; flex-wrap: wrap; }
    .task-head h3 { margin: 0; font-size: 1.2rem; }
    .task-desc { margin: 8px 0; color: var(--muted); }
    .meta { display: flex; gap: 16px; font-size: 0.85rem; color: var(--muted); }
    .badge {
      font-size: 0.75rem;
      border-radius: 999px;
      padding: 3px 10px;
      border: 1px solid var(--line);
    }
    .badge.yellow { background: var(--yellow); }
    .badge.blue { background: var(--blue); }
    .badge.green { background: var(--green); }
    .row { display: flex; gap: 10px; flex-wrap: wrap; }
    .split { display: flex; justify-content: space-between; align-items: flex-start; gap: 10px; }
    label {
      display: block;
      margin-bottom: 6px;
      font-weight: 700;
      font-size: 0.9rem;
    }
    textarea, input, select {
      width: 100%;
      border: 1px solid var(--line);
      border-radius: 10px;
      padding: 9px 12px;
      font-family: inherit;
      font-size: 0.95rem;
      background: #fff;
      color: var(--ink);
    }
    textarea { min-height: 80px; resize: vertical; }
    .grid { display: grid; grid-template-columns: 1fr 1fr; gap: 12px; }
    .field { margin-bottom: 12px; }
    button {
      border: none;
      border-radius: 10px;
      padding: 9px 14px;
      font-family: inherit;
      font-weight: 700;
      cursor: pointer;
      transition: transform 120ms ease, opacity 120ms ease;
    }
    button:hover { transform: translateY(-1px); }
    button:active { transform: translateY(0); }
    .primary { background: var(--accent); color: #fff; }
    .primary:hover { background: var(--accent-strong); }
    .secondary { background: #eef2f7; color: var(--ink); }
    .danger { background: #fee2e2; color: var(--warn); }
    .overlay {
      position: fixed;
      inset: 0;
      background: rgba(15, 23, 42, 0.5);
      display: none;
      align-items: center;
      justify-content: center;
      padding: 16px;
    }
    .overlay.open { display: flex; }
    .modal {
      width: 100%;
      max-width: 460px;
      background: var(--panel);
      border-radius: 14px;
      padding: 22px;
    }
    .empty { text-align: center; color: var(--muted); padding: 40px 0; }
    @media (max-width: 640px) {
      .grid { grid-template-columns: 1fr; }
    }
  </style>
</head>
<body>
  <main class="wrap">
    <section class="hero">
      <h1 class="title">Task Manager</h1>
      <p class="sub">Organize your tasks efficiently</p>
    </section>

    <section class="toolbar">
      <button class="primary" id="addBtn">+ Add New Task</button>
      <div>
        <label for="sortSelect">Sort by</label>
        <select id="sortSelect">
          <option value="created">Newest first</option>
          <option value="priority">Priority</option>
        </select>
      </div>
    </section>

    <section id="taskList">
      <p class="empty">Loading tasks...</p>
    </section>
  </main>

  <div class="overlay" id="formOverlay">
    <form class="modal" id="taskForm">
      <h2 id="formTitle">Create New Task</h2>
      <div class="field">
        <label for="titleInput">Title</label>
        <input id="titleInput" type="text" placeholder="Enter task title..." required>
      </div>
      <div class="field">
        <label for="descriptionInput">Description</label>
        <textarea id="descriptionInput" placeholder="Enter task description..."></textarea>
      </div>
      <div class="grid field">
        <div>
          <label for="statusInput">Status</label>
          <select id="statusInput">
            <option value="pending">Pending</option>
            <option value="in-progress">In Progress</option>
            <option value="completed">Completed</option>
          </select>
        </div>
        <div>
          <label for="priorityInput">Priority</label>
          <select id="priorityInput">
            <option value="low">Low</option>
            <option value="medium" selected>Medium</option>
            <option value="high">High</option>
          </select>
        </div>
      </div>
      <div class="row">
        <button class="primary" type="submit" id="submitBtn">Create Task</button>
        <button class="secondary" type="button" id="cancelBtn">Cancel</button>
      </div>
    </form>
  </div>

  <script>
    const API_BASE = __API_BASE__;
    const taskList = document.getElementById("taskList");
    const overlay = document.getElementById("formOverlay");
    const form = document.getElementById("taskForm");
    const titleInput = document.getElementById("titleInput");
    const descriptionInput = document.getElementById("descriptionInput");
    const statusInput = document.getElementById("statusInput");
    const priorityInput = document.getElementById("priorityInput");
    const sortSelect = document.getElementById("sortSelect");
    let statusColors = {};
    let editingId = null;

    function escapeHtml(value) {
      const div = document.createElement("div");
      div.textContent = value == null ? "" : String(value);
      return div.innerHTML;
    }

    async function loadStatuses() {
      try {
        const response = await fetch(`${API_BASE}/statuses`);
        if (response.ok) {
          const statuses = await response.json();
          statusColors = Object.fromEntries(statuses.map((s) => [s.key, s.color]));
        }
      } catch (err) {
        console.error("Failed to fetch statuses:", err);
      }
    }

    function renderTasks(tasks) {
      if (!tasks.length) {
        taskList.innerHTML = '<p class="empty card">No tasks yet. Create your first task!</p>';
        return;
      }
      taskList.innerHTML = tasks.map((task) => `
        <article class="card priority-${escapeHtml(task.priority)}" style="margin-bottom: 12px;">
          <div class="split">
            <div>
              <div class="task-head">
                <h3>${escapeHtml(task.title)}</h3>
                <span class="badge ${statusColors[task.status] || "yellow"}">
                  ${escapeHtml(task.status.replace("-", " "))}
                </span>
              </div>
              ${task.description ? `<p class="task-desc">${escapeHtml(task.description)}</p>` : ""}
              <div class="meta">
                <span>Priority: ${escapeHtml(task.priority)}</span>
                <span>Created: ${new Date(task.created_at).toLocaleDateString()}</span>
              </div>
            </div>
            <div class="row">
              <button class="secondary" data-edit="${task.id}">Edit</button>
              <button class="danger" data-delete="${task.id}">Delete</button>
            </div>
          </div>
        </article>
      `).join("");
      taskList.querySelectorAll("[data-edit]").forEach((button) => {
        const task = tasks.find((t) => String(t.id) === button.dataset.edit);
        button.addEventListener("click", () => openForm(task));
      });
      taskList.querySelectorAll("[data-delete]").forEach((button) => {
        button.addEventListener("click", () => deleteTask(button.dataset.delete));
      });
    }

    async function fetchTasks() {
      try {
        const response = await fetch(`${API_BASE}/tasks?sort=${sortSelect.value}`);
        if (response.ok) {
          renderTasks(await response.json());
        }
      } catch (err) {
        console.error("Failed to fetch tasks:", err);
      }
    }

    function openForm(task) {
      editingId = task ? task.id : null;
      titleInput.value = task ? task.title : "";
      descriptionInput.value = task ? task.description || "" : "";
      statusInput.value = task ? task.status : "pending";
      priorityInput.value = task ? task.priority : "medium";
      document.getElementById("formTitle").textContent = task ? "Edit Task" : "Create New Task";
      document.getElementById("submitBtn").textContent = task ? "Update Task" : "Create Task";
      overlay.classList.add("open");
      titleInput.focus();
    }

    function closeForm() {
      editingId = null;
      form.reset();
      overlay.classList.remove("open");
    }

    async function saveTask(event) {
      event.preventDefault();
      if (!titleInput.value.trim()) {
        return;
      }
      const payload = {
        title: titleInput.value,
        description: descriptionInput.value,
        status: statusInput.value,
        priority: priorityInput.value,
      };
      const url = editingId ? `${API_BASE}/tasks/${editingId}` : `${API_BASE}/tasks`;
      try {
        const response = await fetch(url, {
          method: editingId ? "PUT" : "POST",
          headers: { "Content-Type": "application/json" },
          body: JSON.stringify(payload),
        });
        if (!response.ok) {
          console.error("Failed to save task:", await response.text());
          return;
        }
        closeForm();
        await fetchTasks();
      } catch (err) {
        console.error("Failed to save task:", err);
      }
    }

    async function deleteTask(id) {
      if (!confirm("Are you sure you want to delete this task?")) {
        return;
      }
      try {
        const response = await fetch(`${API_BASE}/tasks/${id}`, { method: "DELETE" });
        if (!response.ok) {
          console.error("Failed to delete task:", await response.text());
          return;
        }
        await fetchTasks();
      } catch (err) {
        console.error("Failed to delete task:", err);
      }
    }

    document.getElementById("addBtn").addEventListener("click", () => openForm(null));
    document.getElementById("cancelBtn").addEventListener("click", closeForm);
    form.addEventListener("submit", saveTask);
    sortSelect.addEventListener("change", fetchTasks);

    loadStatuses().then(fetchTasks);
  </script>
</body>
</html>
"""
